"""
HTTP exception utilities for common error patterns.

Provides helper functions to reduce boilerplate for 404 errors, and the
handler that turns store constraint violations into 409 responses.
"""

from typing import TypeVar

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from .database import ConstraintViolation

T = TypeVar("T")


def require_resource(resource: T | None, detail: str = "Resource not found") -> T:
    """
    Raise 404 if resource is None, otherwise return the resource.

    Usage:
        article = require_resource(store.get_article(id), "Article not found")
    """
    if resource is None:
        raise HTTPException(status_code=404, detail=detail)
    return resource


def require_article(article: T | None) -> T:
    """Raise 404 if article is None."""
    return require_resource(article, "Article not found")


def require_feed(feed: T | None) -> T:
    """Raise 404 if feed is None."""
    return require_resource(feed, "Feed not found")


def require_meta(value: T | None) -> T:
    """Raise 404 if meta value is None."""
    return require_resource(value, "Meta key not found")


async def constraint_violation_handler(request: Request, exc: ConstraintViolation) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})
