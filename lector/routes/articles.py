"""
Article routes: list, store, ingest, read/star operations.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import get_store
from ..database import ArticleFilter, Store
from ..exceptions import require_article
from ..schemas import (
    ArticleFlagsRequest,
    ArticleRef,
    ArticleResponse,
    BulkMarkReadRequest,
    IngestRequest,
    UpsertArticleRequest,
)

router = APIRouter(prefix="/articles", tags=["articles"])


# ─────────────────────────────────────────────────────────────
# List & Detail
# ─────────────────────────────────────────────────────────────

@router.get("")
async def list_articles(
    store: Annotated[Store, Depends(get_store)],
    feed_url: str | None = None,
    filter: ArticleFilter = ArticleFilter.ALL,
    limit: int | None = Query(default=None, ge=1, le=5000)
) -> list[ArticleResponse]:
    """Get articles newest first, optionally filtered by feed or status."""
    articles = store.list_articles(feed_url=feed_url, filter=filter, limit=limit)
    return [ArticleResponse.from_db(a) for a in articles]


@router.get("/item")
async def get_article(
    id: str,
    store: Annotated[Store, Depends(get_store)]
) -> ArticleResponse:
    """Get a single article."""
    return ArticleResponse.from_db(require_article(store.get_article(id)))


# ─────────────────────────────────────────────────────────────
# Writes
# ─────────────────────────────────────────────────────────────

@router.put("")
async def upsert_article(
    request: UpsertArticleRequest,
    store: Annotated[Store, Depends(get_store)]
) -> ArticleResponse:
    """Store an article. Responds 409 if its feed is not subscribed."""
    store.upsert_article(request.to_db())
    return ArticleResponse.from_db(require_article(store.get_article(request.id)))


@router.post("/ingest")
async def ingest_articles(
    request: IngestRequest,
    store: Annotated[Store, Depends(get_store)]
) -> dict:
    """Store a batch of fetched entries for one feed."""
    if not store.get_feed(request.feed_url):
        raise HTTPException(status_code=404, detail="Feed not found")
    count = store.ingest_items(
        request.feed_url,
        request.feed_name,
        [item.to_item() for item in request.items],
    )
    return {"success": True, "count": count}


@router.patch("/flags")
async def set_flags(
    request: ArticleFlagsRequest,
    store: Annotated[Store, Depends(get_store)]
) -> ArticleResponse:
    """Set read and/or starred flags."""
    if not store.set_article_flags(request.id, request.is_read, request.is_starred):
        raise HTTPException(status_code=404, detail="Article not found")
    return ArticleResponse.from_db(require_article(store.get_article(request.id)))


@router.post("/toggle-read")
async def toggle_read(
    request: ArticleRef,
    store: Annotated[Store, Depends(get_store)]
) -> dict:
    """Flip an article's read status."""
    is_read = require_article(store.toggle_read(request.id))
    return {"success": True, "is_read": is_read}


@router.post("/toggle-star")
async def toggle_star(
    request: ArticleRef,
    store: Annotated[Store, Depends(get_store)]
) -> dict:
    """Flip an article's starred status."""
    is_starred = require_article(store.toggle_star(request.id))
    return {"success": True, "is_starred": is_starred}


@router.post("/mark-read")
async def mark_read(
    request: BulkMarkReadRequest,
    store: Annotated[Store, Depends(get_store)]
) -> dict:
    """Mark multiple articles as read."""
    if len(request.article_ids) > 1000:
        raise HTTPException(status_code=400, detail="Maximum 1000 articles per request")
    count = store.mark_read(request.article_ids)
    return {"success": True, "count": count}
