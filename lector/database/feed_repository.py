"""
Feed repository - CRUD operations for feeds.
"""

from .connection import DatabaseConnection
from .converters import row_to_feed
from .models import DBFeed


class FeedRepository:
    """Repository for feed operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def upsert(self, url: str, name: str, added_at: int):
        """Subscribe to a feed, or rename it if already subscribed.

        The original added_at of an existing feed is kept.
        """
        with self._db.conn() as conn:
            conn.execute(
                """INSERT INTO feeds (url, name, added_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(url) DO UPDATE SET name = excluded.name""",
                (url, name, added_at)
            )

    def get(self, url: str) -> DBFeed | None:
        """Get single feed by URL."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT url, name, added_at FROM feeds WHERE url = ?", (url,)
            ).fetchone()
            return row_to_feed(row) if row else None

    def get_all(self) -> list[DBFeed]:
        """Get all feeds in subscription order."""
        with self._db.conn() as conn:
            rows = conn.execute(
                "SELECT url, name, added_at FROM feeds ORDER BY added_at ASC, url ASC"
            ).fetchall()
            return [row_to_feed(row) for row in rows]

    def delete(self, url: str) -> bool:
        """
        Delete feed and its articles.

        Articles go with the feed through ON DELETE CASCADE, in the same
        transaction. Returns False if the feed did not exist.
        """
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM feeds WHERE url = ?", (url,))
            return cursor.rowcount > 0
