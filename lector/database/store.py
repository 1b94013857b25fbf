"""
Store facade - the only access path to feeds, articles and metadata.

A Store assumes the schema is current. Use open_store() to run migrations
and get a Store back; the Store itself never migrates.
"""

import logging
from pathlib import Path

from .connection import DatabaseConnection
from .article_repository import ArticleRepository
from .feed_repository import FeedRepository
from .import_repository import ImportRepository
from .meta_repository import MetaRepository
from .migrations import REGISTRY, MigrationRegistry, MigrationRunner
from .models import ArticleFilter, DBArticle, DBFeed, FeedItem

logger = logging.getLogger(__name__)

DEFAULT_MAX_ARTICLES_PER_FEED = 500


class Store:
    """
    Unified store access facade.

    Delegates to specialized repositories internally.
    """

    def __init__(
        self,
        connection: DatabaseConnection,
        max_articles_per_feed: int = DEFAULT_MAX_ARTICLES_PER_FEED,
    ):
        self._connection = connection
        self.max_articles_per_feed = max_articles_per_feed

        # Initialize repositories
        self.feeds = FeedRepository(connection)
        self.articles = ArticleRepository(connection)
        self.meta = MetaRepository(connection)
        self.imports = ImportRepository(connection)

    @property
    def db_path(self) -> Path:
        return self._connection.db_path

    def schema_version(self) -> int:
        """Schema version recorded in the database file."""
        return MigrationRunner().current_version(self._connection)

    # ─────────────────────────────────────────────────────────────
    # Feed operations (delegated to FeedRepository)
    # ─────────────────────────────────────────────────────────────

    def upsert_feed(self, url: str, name: str, added_at: int):
        return self.feeds.upsert(url, name, added_at)

    def get_feed(self, url: str) -> DBFeed | None:
        return self.feeds.get(url)

    def list_feeds(self) -> list[DBFeed]:
        return self.feeds.get_all()

    def delete_feed(self, url: str) -> bool:
        return self.feeds.delete(url)

    # ─────────────────────────────────────────────────────────────
    # Article operations (delegated to ArticleRepository)
    # ─────────────────────────────────────────────────────────────

    def upsert_article(self, article: DBArticle):
        return self.articles.upsert(article)

    def ingest_items(
        self,
        feed_url: str,
        feed_name: str,
        items: list[FeedItem],
        keep: int | None = None,
    ) -> int:
        return self.articles.ingest(
            feed_url, feed_name, items,
            keep if keep is not None else self.max_articles_per_feed
        )

    def get_article(self, article_id: str) -> DBArticle | None:
        return self.articles.get(article_id)

    def list_articles(
        self,
        feed_url: str | None = None,
        filter: ArticleFilter = ArticleFilter.ALL,
        limit: int | None = None,
    ) -> list[DBArticle]:
        return self.articles.get_many(feed_url, filter, limit)

    def set_article_flags(
        self,
        article_id: str,
        is_read: bool | None = None,
        is_starred: bool | None = None,
    ) -> bool:
        return self.articles.set_flags(article_id, is_read, is_starred)

    def toggle_read(self, article_id: str) -> bool | None:
        return self.articles.toggle_read(article_id)

    def toggle_star(self, article_id: str) -> bool | None:
        return self.articles.toggle_star(article_id)

    def mark_read(self, article_ids: list[str]) -> int:
        return self.articles.bulk_mark_read(article_ids)

    # ─────────────────────────────────────────────────────────────
    # Meta operations (delegated to MetaRepository)
    # ─────────────────────────────────────────────────────────────

    def get_meta(self, key: str, default: str | None = None) -> str | None:
        return self.meta.get(key, default)

    def set_meta(self, key: str, value: str):
        return self.meta.set(key, value)

    def get_all_meta(self) -> dict[str, str]:
        return self.meta.get_all()


def open_store(
    db_path: Path,
    registry: MigrationRegistry = REGISTRY,
    max_articles_per_feed: int = DEFAULT_MAX_ARTICLES_PER_FEED,
) -> Store:
    """
    Open the database file, bring its schema up to date, and return a Store.

    Raises ConnectionFailure, MigrationExecutionFailure or
    UnknownSchemaVersion; callers should treat these as fatal.
    """
    connection = DatabaseConnection(db_path)
    runner = MigrationRunner(registry)
    applied = runner.run(connection)
    if applied:
        logger.info(f"Database {db_path} migrated to version {registry.latest_version}")
    return Store(connection, max_articles_per_feed=max_articles_per_feed)
