"""
Versioned, forward-only schema migrations.

The registry is built once at import from the schema generations and never
changes afterwards. The runner applies every migration newer than the file's
marker, each in its own transaction, and stores the marker in SQLite's
PRAGMA user_version so it commits atomically with the DDL.
"""

import logging
import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from .connection import DatabaseConnection
from .errors import (
    ConnectionFailure,
    MigrationExecutionFailure,
    RegistryInconsistency,
    StoreError,
    UnknownSchemaVersion,
)
from .schema import GENERATIONS, split_statements

logger = logging.getLogger(__name__)


class MigrationKind(Enum):
    UP = "up"


class SchemaState(Enum):
    UNINITIALIZED = "uninitialized"
    MIGRATING = "migrating"
    CURRENT = "current"
    FAILED = "failed"


@dataclass(frozen=True)
class Migration:
    """Represents a database migration."""

    version: int
    description: str
    sql: str
    kind: MigrationKind = MigrationKind.UP


class MigrationRegistry:
    """Ordered, immutable catalog of migrations."""

    def __init__(self, migrations: Iterable[Migration]):
        self._migrations = tuple(migrations)
        self._validate()

    def _validate(self):
        previous = 0
        for migration in self._migrations:
            version = migration.version
            if not isinstance(version, int) or isinstance(version, bool) or version < 1:
                raise RegistryInconsistency(
                    f"Migration version must be a positive integer, got {version!r}"
                )
            if version == previous:
                raise RegistryInconsistency(f"Duplicate migration version {version}")
            if version < previous:
                raise RegistryInconsistency(
                    f"Migration version {version} follows {previous}; versions must increase"
                )
            previous = version

    def __iter__(self) -> Iterator[Migration]:
        return iter(self._migrations)

    def __len__(self) -> int:
        return len(self._migrations)

    @property
    def versions(self) -> tuple[int, ...]:
        return tuple(m.version for m in self._migrations)

    @property
    def latest_version(self) -> int:
        """Highest registered version, 0 for an empty registry."""
        return self._migrations[-1].version if self._migrations else 0

    def pending(self, after_version: int) -> tuple[Migration, ...]:
        """Migrations newer than after_version, in ascending order."""
        return tuple(m for m in self._migrations if m.version > after_version)


REGISTRY = MigrationRegistry(
    Migration(version=g.version, description=g.description, sql=g.sql)
    for g in GENERATIONS
)


class MigrationRunner:
    """
    Brings a database file up to the registry's latest version.

    Each pending migration runs in its own transaction together with the
    marker update. The first failure rolls back that migration and stops
    the run; later migrations are never attempted.
    """

    def __init__(self, registry: MigrationRegistry = REGISTRY):
        self.registry = registry
        self.state = SchemaState.UNINITIALIZED

    def current_version(self, connection: DatabaseConnection) -> int:
        """Read the applied schema version (0 for a fresh file)."""
        with connection.autocommit() as conn:
            return self._read_marker(conn, connection)

    def run(self, connection: DatabaseConnection) -> list[int]:
        """
        Apply all pending migrations.

        Returns list of applied migration versions.
        """
        try:
            with connection.autocommit() as conn:
                current = self._read_marker(conn, connection)
                latest = self.registry.latest_version

                if current > latest:
                    raise UnknownSchemaVersion(
                        f"Database {connection.db_path} is at schema version {current}, "
                        f"newer than the latest known version {latest}"
                    )

                pending = self.registry.pending(current)
                if not pending:
                    self.state = SchemaState.CURRENT
                    logger.info(f"Schema is current at version {current}")
                    return []

                self.state = SchemaState.MIGRATING
                applied_versions = []
                for migration in pending:
                    self._apply(conn, migration)
                    applied_versions.append(migration.version)
        except StoreError:
            self.state = SchemaState.FAILED
            raise

        self.state = SchemaState.CURRENT
        logger.info(f"Applied {len(applied_versions)} migrations: {applied_versions}")
        return applied_versions

    @staticmethod
    def _read_marker(conn: sqlite3.Connection, connection: DatabaseConnection) -> int:
        try:
            return conn.execute("PRAGMA user_version").fetchone()[0]
        except sqlite3.DatabaseError as e:
            raise ConnectionFailure(
                f"Cannot read schema version from {connection.db_path}: {e}"
            ) from e

    def _apply(self, conn: sqlite3.Connection, migration: Migration):
        """Apply a single migration inside its own transaction."""
        logger.info(f"Applying migration {migration.version}: {migration.description}")

        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.OperationalError as e:
            raise ConnectionFailure(
                f"Cannot start transaction for migration {migration.version}: {e}"
            ) from e

        statement = ""
        try:
            for statement in split_statements(migration.sql):
                conn.execute(statement)
            # PRAGMA does not accept bound parameters; version is a validated int
            statement = f"PRAGMA user_version = {migration.version}"
            conn.execute(statement)
            statement = "COMMIT"
            conn.execute(statement)
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            logger.error(f"Migration {migration.version} failed: {e}")
            raise MigrationExecutionFailure(
                migration.version, migration.description, statement, str(e)
            ) from e

        logger.info(f"Migration {migration.version} applied successfully")
