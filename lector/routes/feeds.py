"""
Feed routes: subscribe, rename, unsubscribe.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from ..config import get_store
from ..database import Store
from ..exceptions import require_feed
from ..schemas import FeedResponse, UpsertFeedRequest

router = APIRouter(prefix="/feeds", tags=["feeds"])


@router.get("")
async def list_feeds(
    store: Annotated[Store, Depends(get_store)]
) -> list[FeedResponse]:
    """List all subscribed feeds."""
    return [FeedResponse.from_db(f) for f in store.list_feeds()]


@router.put("")
async def upsert_feed(
    request: UpsertFeedRequest,
    store: Annotated[Store, Depends(get_store)]
) -> FeedResponse:
    """Subscribe to a feed, or rename an existing subscription."""
    store.upsert_feed(request.url, request.name, request.added_at)
    return FeedResponse.from_db(require_feed(store.get_feed(request.url)))


@router.delete("")
async def remove_feed(
    url: str,
    store: Annotated[Store, Depends(get_store)]
) -> dict:
    """Unsubscribe from a feed. Its articles are deleted with it."""
    require_feed(store.get_feed(url))
    store.delete_feed(url)
    return {"success": True}
