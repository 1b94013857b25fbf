"""
Configuration and application state management.
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from fastapi import HTTPException

if TYPE_CHECKING:
    from .database import Store

# Load environment variables
load_dotenv()


def _parse_optional_path(value: str | None) -> Path | None:
    """Parse an optional path from environment variable."""
    if not value:
        return None
    return Path(value)


class Config:
    """Application configuration from environment."""
    DB_PATH: Path = Path(os.getenv("DB_PATH", "./data/lector.db"))
    PORT: int = int(os.getenv("PORT", "5005"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Per-feed cap on unstarred articles kept after each ingest
    MAX_ARTICLES_PER_FEED: int = int(os.getenv("MAX_ARTICLES_PER_FEED", "500"))

    # JSON export of the pre-database browser storage, imported once
    LEGACY_EXPORT_PATH: Path | None = _parse_optional_path(os.getenv("LEGACY_EXPORT_PATH"))


config = Config()


class AppState:
    """Shared application state."""
    store: "Store | None" = None


state = AppState()


def get_store() -> "Store":
    """Dependency to get store instance."""
    if not state.store:
        raise HTTPException(status_code=500, detail="Store not initialized")
    return state.store
