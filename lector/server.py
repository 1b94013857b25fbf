"""
Lector Store API Server

FastAPI application the host shell talks to, providing endpoints for:
- Feed management (subscribe, rename, unsubscribe)
- Article management (list, store, ingest, read/star)
- Meta values
- Health check

The store is opened, and its schema migrated, before the app accepts any
request. A migration failure aborts startup.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from . import __version__
from .config import config, state
from .database import ConstraintViolation, open_store
from .exceptions import constraint_violation_handler
from .legacy import LegacyImportError, import_legacy_if_needed
from .routes import articles_router, feeds_router, misc_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup application resources."""
    # Startup - skip if already initialized (e.g., by tests)
    if state.store is None:
        try:
            state.store = open_store(
                config.DB_PATH,
                max_articles_per_feed=config.MAX_ARTICLES_PER_FEED,
            )
        except Exception:
            logger.exception(f"Could not open store at {config.DB_PATH}; aborting startup")
            raise
        logger.info(f"Store ready at {config.DB_PATH}")

        if config.LEGACY_EXPORT_PATH:
            try:
                import_legacy_if_needed(state.store, config.LEGACY_EXPORT_PATH)
            except LegacyImportError:
                logger.exception(
                    f"Legacy export {config.LEGACY_EXPORT_PATH} could not be imported; continuing without it"
                )

    yield

    # Shutdown
    state.store = None


app = FastAPI(
    title="Lector Store API",
    version=__version__,
    lifespan=lifespan
)

app.add_exception_handler(ConstraintViolation, constraint_violation_handler)

# Include routers
app.include_router(misc_router)
app.include_router(feeds_router)
app.include_router(articles_router)


def main():
    """Run the API server."""
    uvicorn.run(
        "lector.server:app",
        host="127.0.0.1",
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
