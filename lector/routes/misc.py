"""
Miscellaneous routes: health check, meta values.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from .. import __version__
from ..config import get_store
from ..database import Store
from ..exceptions import require_meta
from ..schemas import MetaValue, SetMetaRequest

router = APIRouter(tags=["misc"])


# ─────────────────────────────────────────────────────────────
# Health Check
# ─────────────────────────────────────────────────────────────

@router.get("/status")
async def health_check(
    store: Annotated[Store, Depends(get_store)]
) -> dict:
    """API health check."""
    return {
        "status": "ok",
        "version": __version__,
        "schema_version": store.schema_version(),
    }


# ─────────────────────────────────────────────────────────────
# Meta
# ─────────────────────────────────────────────────────────────

@router.get("/meta")
async def list_meta(
    store: Annotated[Store, Depends(get_store)]
) -> dict[str, str]:
    """Get all meta values."""
    return store.get_all_meta()


@router.get("/meta/{key}")
async def get_meta(
    key: str,
    store: Annotated[Store, Depends(get_store)]
) -> MetaValue:
    """Get a single meta value."""
    return MetaValue(key=key, value=require_meta(store.get_meta(key)))


@router.put("/meta/{key}")
async def set_meta(
    key: str,
    request: SetMetaRequest,
    store: Annotated[Store, Depends(get_store)]
) -> MetaValue:
    """Set a meta value, overwriting any previous one."""
    store.set_meta(key, request.value)
    return MetaValue(key=key, value=request.value)
