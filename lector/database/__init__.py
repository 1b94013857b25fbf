"""
Database module - SQLite persistence for feeds, articles and metadata.

Uses repository pattern for better separation of concerns.
"""

from .connection import DatabaseConnection
from .errors import (
    ConnectionFailure,
    ConstraintViolation,
    MigrationExecutionFailure,
    RegistryInconsistency,
    StoreError,
    UnknownSchemaVersion,
)
from .migrations import (
    REGISTRY,
    Migration,
    MigrationKind,
    MigrationRegistry,
    MigrationRunner,
    SchemaState,
)
from .models import ArticleFilter, DBArticle, DBFeed, FeedItem
from .store import Store, open_store

__all__ = [
    "Store",
    "open_store",
    "DatabaseConnection",
    "DBArticle",
    "DBFeed",
    "FeedItem",
    "ArticleFilter",
    "REGISTRY",
    "Migration",
    "MigrationKind",
    "MigrationRegistry",
    "MigrationRunner",
    "SchemaState",
    "StoreError",
    "RegistryInconsistency",
    "MigrationExecutionFailure",
    "ConstraintViolation",
    "ConnectionFailure",
    "UnknownSchemaVersion",
]
