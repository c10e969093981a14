"""
Video metadata endpoints
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from tubely.api.deps import get_current_user_id, get_store, get_thumbnail_store, parse_video_id
from tubely.schemas.video import VideoCreate, VideoResponse
from tubely.services.metadata_store import MetadataStore
from tubely.services.storage import ThumbnailStore

router = APIRouter()


@router.post("", response_model=VideoResponse, status_code=201)
def create_video(
    payload: VideoCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: MetadataStore = Depends(get_store),
):
    """Create a draft video record with no media attached"""
    return store.create_video(user_id, payload.title, payload.description)


@router.get("", response_model=List[VideoResponse])
def list_videos(
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: MetadataStore = Depends(get_store),
):
    return store.get_videos(user_id)


@router.get("/{video_id}", response_model=VideoResponse)
def get_video(video_id: str, store: MetadataStore = Depends(get_store)):
    video = store.get_video(parse_video_id(video_id))
    if video is None:
        raise HTTPException(status_code=404, detail="Video not found")
    return video


@router.delete("/{video_id}", status_code=204)
def delete_video(
    video_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: MetadataStore = Depends(get_store),
    thumbnail_store: ThumbnailStore = Depends(get_thumbnail_store),
):
    parsed_id = parse_video_id(video_id)
    video = store.get_video(parsed_id)
    if video is None:
        raise HTTPException(status_code=404, detail="Video not found")
    if video.user_id != user_id:
        raise HTTPException(status_code=403, detail="You can't delete this video")

    store.delete_video(video)
    # Disk thumbnails stay in the assets root; in-memory ones go with the record
    thumbnail_store.delete(parsed_id)
    return Response(status_code=204)
