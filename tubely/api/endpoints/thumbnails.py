"""
Thumbnail upload and in-memory thumbnail serving
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.datastructures import UploadFile

from tubely.api.deps import authenticate, get_store, get_thumbnail_store, limit_body, parse_video_id
from tubely.core.config import settings
from tubely.schemas.video import VideoResponse
from tubely.services.metadata_store import MetadataStore
from tubely.services.storage import StorageError, ThumbnailStore

logger = logging.getLogger(__name__)

router = APIRouter()

ALLOWED_THUMBNAIL_TYPES = {"image/png", "image/jpeg"}


@router.post("/thumbnail_upload/{video_id}", response_model=VideoResponse)
async def upload_thumbnail(
    video_id: str,
    request: Request,
    store: MetadataStore = Depends(get_store),
    thumbnail_store: ThumbnailStore = Depends(get_thumbnail_store),
):
    """
    Attach a PNG or JPEG thumbnail to a video owned by the caller.

    The image goes to the configured thumbnail store first; the record's
    thumbnail URL is only updated once the image is stored.
    """
    parsed_id = parse_video_id(video_id)
    user_id = authenticate(request.headers)

    logger.info("Uploading thumbnail for video %s by user %s", parsed_id, user_id)

    form = await limit_body(request, settings.MAX_THUMBNAIL_UPLOAD_BYTES).form()
    try:
        upload = form.get("thumbnail")
        if not isinstance(upload, UploadFile):
            raise HTTPException(status_code=400, detail="Unable to find thumbnail in form")

        media_type = (upload.content_type or "").split(";")[0].strip().lower()
        if not media_type:
            raise HTTPException(status_code=400, detail="Media type not specified")
        if media_type not in ALLOWED_THUMBNAIL_TYPES:
            raise HTTPException(status_code=400, detail="Invalid file type")

        data = await upload.read(settings.MAX_THUMBNAIL_UPLOAD_BYTES + 1)
        if len(data) > settings.MAX_THUMBNAIL_UPLOAD_BYTES:
            raise HTTPException(status_code=413, detail="Thumbnail too large")
    finally:
        await form.close()

    video = await asyncio.to_thread(store.get_video, parsed_id)
    if video is None:
        raise HTTPException(status_code=404, detail="Video does not exist")
    if video.user_id != user_id:
        raise HTTPException(status_code=401, detail="User ID mismatch")

    try:
        thumbnail_url = await asyncio.to_thread(thumbnail_store.save, parsed_id, data, media_type)
    except StorageError as e:
        logger.error("Unable to store thumbnail for video %s: %s", parsed_id, e)
        raise HTTPException(status_code=500, detail="Unable to store thumbnail") from e

    video.thumbnail_url = thumbnail_url
    try:
        await asyncio.to_thread(store.update_video, video)
    except SQLAlchemyError as e:
        logger.exception("Unable to update video metadata for %s", parsed_id)
        raise HTTPException(status_code=500, detail="Unable to update video metadata") from e

    return video


@router.get("/thumbnails/{video_id}")
def get_thumbnail(video_id: str, thumbnail_store: ThumbnailStore = Depends(get_thumbnail_store)):
    """Serve a thumbnail kept by the in-memory store"""
    thumbnail = thumbnail_store.get(parse_video_id(video_id))
    if thumbnail is None:
        raise HTTPException(status_code=404, detail="Thumbnail not found")

    data, media_type = thumbnail
    return Response(content=data, media_type=media_type)
