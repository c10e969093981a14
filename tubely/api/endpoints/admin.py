"""
Admin endpoints
"""

from fastapi import APIRouter, Depends, HTTPException

from tubely.api.deps import get_store, get_thumbnail_store
from tubely.core.config import settings
from tubely.services.metadata_store import MetadataStore
from tubely.services.storage import MemoryThumbnailStore, ThumbnailStore

router = APIRouter()


@router.post("/reset")
def reset(
    store: MetadataStore = Depends(get_store),
    thumbnail_store: ThumbnailStore = Depends(get_thumbnail_store),
):
    """Wipe all users and videos (dev platform only)"""
    if settings.PLATFORM != "dev":
        raise HTTPException(status_code=403, detail="Reset is only allowed in dev environment")

    store.reset()
    if isinstance(thumbnail_store, MemoryThumbnailStore):
        thumbnail_store.clear()
    return {"message": "Database reset to initial state"}
