"""
Store error taxonomy.

Construction and migration errors are fatal to startup; constraint violations
are returned to the caller of the CRUD operation that caused them.
"""


class StoreError(Exception):
    """Base class for persistence errors."""


class RegistryInconsistency(StoreError):
    """Migration registry versions are duplicated, non-positive or out of order."""


class MigrationExecutionFailure(StoreError):
    """A migration statement failed; its transaction was rolled back."""

    def __init__(self, version: int, description: str, statement: str, reason: str):
        self.version = version
        self.description = description
        self.statement = statement
        self.reason = reason
        super().__init__(
            f"Migration {version} ({description}) failed: {reason}\n"
            f"Statement: {statement}"
        )


class ConstraintViolation(StoreError):
    """Foreign-key or uniqueness breach on a store operation."""


class ConnectionFailure(StoreError):
    """Database file could not be opened or locked."""


class UnknownSchemaVersion(StoreError):
    """Database was migrated past the newest version this build knows about."""
