"""
Database connection management.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import ConnectionFailure, ConstraintViolation


class DatabaseConnection:
    """Manages connections to the database file."""

    def __init__(self, db_path: Path, timeout: float = 5.0):
        self.db_path = Path(db_path)
        self.timeout = timeout
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConnectionFailure(f"Cannot create directory for {self.db_path}: {e}") from e

    def _connect(self, isolation_level: str | None) -> sqlite3.Connection:
        try:
            connection = sqlite3.connect(
                self.db_path, timeout=self.timeout, isolation_level=isolation_level
            )
        except sqlite3.Error as e:
            raise ConnectionFailure(f"Cannot open database {self.db_path}: {e}") from e
        connection.row_factory = sqlite3.Row
        try:
            connection.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            connection.close()
            raise ConnectionFailure(f"Cannot open database {self.db_path}: {e}") from e
        return connection

    @contextmanager
    def conn(self) -> Iterator[sqlite3.Connection]:
        """Get database connection with row factory; commits on success."""
        connection = self._connect("DEFERRED")
        try:
            yield connection
            connection.commit()
        except sqlite3.IntegrityError as e:
            connection.rollback()
            raise ConstraintViolation(str(e)) from e
        finally:
            connection.close()

    @contextmanager
    def autocommit(self) -> Iterator[sqlite3.Connection]:
        """Connection with no implicit transactions; caller issues BEGIN/COMMIT."""
        connection = self._connect(None)
        try:
            yield connection
        finally:
            connection.close()
