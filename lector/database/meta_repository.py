"""
Meta repository - process-wide settings and bookkeeping values.
"""

from .connection import DatabaseConnection


class MetaRepository:
    """Repository for key/value metadata."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a metadata value."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT value FROM meta WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else default

    def set(self, key: str, value: str):
        """Set a metadata value, overwriting any previous one."""
        with self._db.conn() as conn:
            conn.execute(
                """INSERT INTO meta (key, value)
                   VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (key, value)
            )

    def get_all(self) -> dict[str, str]:
        """Get all metadata as a dictionary."""
        with self._db.conn() as conn:
            rows = conn.execute("SELECT key, value FROM meta ORDER BY key").fetchall()
            return {row["key"]: row["value"] for row in rows}
