"""
Article repository - CRUD operations for articles.
"""

import sqlite3
import time

from .connection import DatabaseConnection
from .converters import article_id, parse_published, row_to_article
from .models import ArticleFilter, DBArticle, FeedItem

ARTICLE_COLUMNS = (
    "id, feed_url, feed_name, title, link, published, published_ts, "
    "content, author, is_read, is_starred, fetched_at"
)

# Articles without a published date sort after dated ones, newest fetch first
ORDER_BY = "published_ts DESC NULLS LAST, fetched_at DESC, id ASC"

UPSERT_SQL = f"""INSERT INTO articles ({ARTICLE_COLUMNS})
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    ON CONFLICT(id) DO UPDATE SET
    feed_url = excluded.feed_url, feed_name = excluded.feed_name, title = excluded.title,
    link = excluded.link, published = excluded.published,
    published_ts = excluded.published_ts, content = excluded.content,
    author = excluded.author, fetched_at = excluded.fetched_at"""


class ArticleRepository:
    """Repository for article operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    @staticmethod
    def _upsert(conn: sqlite3.Connection, article: DBArticle):
        # Read/starred flags are only written on first insert; later
        # refreshes from the feed must not reset what the user chose.
        conn.execute(
            UPSERT_SQL,
            (article.id, article.feed_url, article.feed_name, article.title,
             article.link, article.published, article.published_ts,
             article.content, article.author, int(article.is_read),
             int(article.is_starred), article.fetched_at)
        )

    def upsert(self, article: DBArticle):
        """Insert or refresh an article. Raises ConstraintViolation for an unknown feed."""
        with self._db.conn() as conn:
            self._upsert(conn, article)

    def ingest(
        self,
        feed_url: str,
        feed_name: str,
        items: list[FeedItem],
        keep: int,
    ) -> int:
        """
        Store freshly fetched items for one feed, then prune that feed.

        Unstarred articles beyond the newest `keep` are deleted. Starred
        articles and other feeds are left alone. Returns the number of
        items stored.
        """
        now = int(time.time())
        with self._db.conn() as conn:
            for item in items:
                self._upsert(conn, DBArticle(
                    id=article_id(feed_url, item.link, item.title),
                    feed_url=feed_url,
                    feed_name=feed_name,
                    title=item.title,
                    link=item.link,
                    published=item.published,
                    published_ts=parse_published(item.published),
                    content=item.content,
                    author=item.author,
                    fetched_at=now,
                ))
            conn.execute(
                f"""DELETE FROM articles
                    WHERE is_starred = 0
                      AND feed_url = ?
                      AND id NOT IN (
                        SELECT id FROM articles
                        WHERE is_starred = 0 AND feed_url = ?
                        ORDER BY {ORDER_BY}
                        LIMIT ?
                      )""",
                (feed_url, feed_url, keep)
            )
        return len(items)

    def get(self, article_id: str) -> DBArticle | None:
        """Get single article by ID."""
        with self._db.conn() as conn:
            row = conn.execute(
                f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE id = ?", (article_id,)
            ).fetchone()
            return row_to_article(row) if row else None

    def get_many(
        self,
        feed_url: str | None = None,
        filter: ArticleFilter = ArticleFilter.ALL,
        limit: int | None = None,
    ) -> list[DBArticle]:
        """Get articles, newest first, with optional filters."""
        query = f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE 1=1"
        params: list = []

        if feed_url is not None:
            query += " AND feed_url = ?"
            params.append(feed_url)
        if filter == ArticleFilter.UNREAD:
            query += " AND is_read = 0"
        elif filter == ArticleFilter.STARRED:
            query += " AND is_starred = 1"

        query += f" ORDER BY {ORDER_BY}"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        with self._db.conn() as conn:
            rows = conn.execute(query, params).fetchall()
            return [row_to_article(row) for row in rows]

    def set_flags(
        self,
        article_id: str,
        is_read: bool | None = None,
        is_starred: bool | None = None,
    ) -> bool:
        """Set read and/or starred flags. Returns False if the article does not exist."""
        assignments = []
        params: list = []
        if is_read is not None:
            assignments.append("is_read = ?")
            params.append(int(is_read))
        if is_starred is not None:
            assignments.append("is_starred = ?")
            params.append(int(is_starred))

        with self._db.conn() as conn:
            if not assignments:
                row = conn.execute(
                    "SELECT 1 FROM articles WHERE id = ?", (article_id,)
                ).fetchone()
                return row is not None
            cursor = conn.execute(
                f"UPDATE articles SET {', '.join(assignments)} WHERE id = ?",
                params + [article_id]
            )
            return cursor.rowcount > 0

    def _toggle(self, article_id: str, column: str) -> bool | None:
        with self._db.conn() as conn:
            conn.execute(
                f"UPDATE articles SET {column} = CASE WHEN {column} = 1 THEN 0 ELSE 1 END WHERE id = ?",
                (article_id,)
            )
            row = conn.execute(
                f"SELECT {column} FROM articles WHERE id = ?", (article_id,)
            ).fetchone()
            return bool(row[column]) if row else None

    def toggle_read(self, article_id: str) -> bool | None:
        """Toggle read status. Returns new status, or None if not found."""
        return self._toggle(article_id, "is_read")

    def toggle_star(self, article_id: str) -> bool | None:
        """Toggle starred status. Returns new status, or None if not found."""
        return self._toggle(article_id, "is_starred")

    def bulk_mark_read(self, article_ids: list[str]) -> int:
        """Mark multiple articles as read. Returns count updated."""
        if not article_ids:
            return 0
        with self._db.conn() as conn:
            placeholders = ",".join("?" * len(article_ids))
            cursor = conn.execute(
                f"UPDATE articles SET is_read = 1 WHERE id IN ({placeholders})",
                article_ids
            )
            return cursor.rowcount
