"""
Import repository - one-shot bulk import of previously stored reader data.
"""

from .connection import DatabaseConnection
from .models import DBArticle, DBFeed


class ImportRepository:
    """Inserts feeds and articles from an older store without overwriting."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def import_all(
        self,
        feeds: list[DBFeed],
        articles: list[DBArticle],
        marker_key: str,
    ) -> tuple[int, int]:
        """
        Insert feeds and articles, then set marker_key to "1", atomically.

        Rows that already exist win. Articles whose feed is not present
        after the feed inserts are skipped. Returns (feeds, articles) inserted.
        """
        feeds_added = 0
        articles_added = 0
        with self._db.conn() as conn:
            for feed in feeds:
                cursor = conn.execute(
                    "INSERT OR IGNORE INTO feeds (url, name, added_at) VALUES (?, ?, ?)",
                    (feed.url, feed.name, feed.added_at)
                )
                feeds_added += cursor.rowcount

            known_urls = {row["url"] for row in conn.execute("SELECT url FROM feeds")}

            for article in articles:
                if article.feed_url not in known_urls:
                    continue
                cursor = conn.execute(
                    """INSERT OR IGNORE INTO articles
                       (id, feed_url, feed_name, title, link, published, published_ts,
                        content, author, is_read, is_starred, fetched_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                    (article.id, article.feed_url, article.feed_name, article.title,
                     article.link, article.published, article.published_ts,
                     article.content, article.author, int(article.is_read),
                     int(article.is_starred), article.fetched_at)
                )
                articles_added += cursor.rowcount

            conn.execute(
                """INSERT INTO meta (key, value) VALUES (?, '1')
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (marker_key,)
            )
        return feeds_added, articles_added
