"""
Video upload: probe, fast-start remux, push to the bucket
"""

import asyncio
import logging
import os
import tempfile
import uuid

import aiofiles
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from starlette.datastructures import UploadFile

from tubely.api.deps import get_current_user_id, get_store, get_uploader, limit_body, parse_video_id
from tubely.core.config import settings
from tubely.schemas.video import VideoResponse
from tubely.services.media import (
    MediaToolError,
    aspect_ratio_prefix,
    get_video_aspect_ratio,
    process_video_for_fast_start,
)
from tubely.services.metadata_store import MetadataStore
from tubely.services.storage import ObjectUploader, StorageError, random_name

logger = logging.getLogger(__name__)

router = APIRouter()

VIDEO_MEDIA_TYPE = "video/mp4"
CHUNK_SIZE = 1024 * 1024


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


async def _buffer_upload(upload: UploadFile, path: str) -> int:
    """Copy the upload into `path`"""
    written = 0
    async with aiofiles.open(path, "wb") as out:
        while True:
            chunk = await upload.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            await out.write(chunk)
    return written


@router.post("/video_upload/{video_id}", response_model=VideoResponse)
async def upload_video(
    video_id: str,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: MetadataStore = Depends(get_store),
    uploader: ObjectUploader = Depends(get_uploader),
):
    """
    Upload an MP4 for a video owned by the caller.

    The file is buffered to a temp file, classified by aspect ratio, remuxed
    for fast start and pushed to the bucket under
    `{landscape|portrait|other}/{random}.mp4`. The record's video URL is set
    to the CDN URL only after the bucket write succeeds. Temp files are
    removed on every exit path.
    """
    parsed_id = parse_video_id(video_id)

    video = await asyncio.to_thread(store.get_video, parsed_id)
    if video is None:
        raise HTTPException(status_code=404, detail="Video ID not found")
    if video.user_id != user_id:
        raise HTTPException(status_code=401, detail="This video does not belong to you")

    # Caps the whole multipart body, not just the video part
    request = limit_body(request, settings.MAX_VIDEO_UPLOAD_BYTES)

    logger.info("Uploading video %s by user %s", parsed_id, user_id)

    with tempfile.NamedTemporaryFile(prefix="tubely-upload-", suffix=".mp4", delete=False) as tmp:
        temp_path = tmp.name
    processing_path = f"{temp_path}.processing"

    form = None
    try:
        form = await request.form()
        upload = form.get("video")
        if not isinstance(upload, UploadFile):
            raise HTTPException(status_code=400, detail="Unable to find video in form")

        media_type = (upload.content_type or "").split(";")[0].strip().lower()
        if media_type != VIDEO_MEDIA_TYPE:
            raise HTTPException(status_code=400, detail="Invalid file type")

        size = await _buffer_upload(upload, temp_path)
        logger.info("Buffered %d bytes for video %s", size, parsed_id)

        try:
            aspect_ratio = await asyncio.to_thread(
                get_video_aspect_ratio, temp_path, settings.FFPROBE_BIN, settings.MEDIA_TOOL_TIMEOUT
            )
        except MediaToolError as e:
            logger.error("Unable to get aspect ratio of video %s: %s", parsed_id, e)
            raise HTTPException(status_code=500, detail="Unable to get aspect ratio of video") from e

        try:
            processed_path = await asyncio.to_thread(
                process_video_for_fast_start, temp_path, settings.FFMPEG_BIN, settings.MEDIA_TOOL_TIMEOUT
            )
        except MediaToolError as e:
            logger.error("Unable to process video %s: %s", parsed_id, e)
            raise HTTPException(status_code=500, detail="Unable to process video") from e

        object_key = f"{aspect_ratio_prefix(aspect_ratio)}/{random_name()}.mp4"
        try:
            await asyncio.to_thread(uploader.put_object, processed_path, object_key, VIDEO_MEDIA_TYPE)
        except StorageError as e:
            logger.error("Unable to store video %s in bucket: %s", parsed_id, e)
            raise HTTPException(status_code=500, detail="Unable to store object in S3 bucket") from e
    finally:
        if form is not None:
            await form.close()
        _remove_quietly(temp_path)
        _remove_quietly(processing_path)

    video.video_url = f"{settings.S3_CF_DISTRIBUTION.rstrip('/')}/{object_key}"
    try:
        await asyncio.to_thread(store.update_video, video)
    except SQLAlchemyError as e:
        logger.exception("Unable to update video metadata for %s", parsed_id)
        raise HTTPException(status_code=500, detail="Unable to update video metadata") from e

    logger.info("Video %s available at %s", parsed_id, video.video_url)
    return video
