"""
Shared endpoint dependencies
"""

import uuid
from functools import lru_cache
from typing import Mapping

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from tubely.core.auth import AuthError, get_bearer_token, validate_jwt
from tubely.core.config import settings
from tubely.core.database import get_db
from tubely.services.metadata_store import MetadataStore
from tubely.services.storage import (
    DiskThumbnailStore,
    MemoryThumbnailStore,
    ObjectUploader,
    S3Config,
    S3Uploader,
    ThumbnailStore,
)


def get_store(db: Session = Depends(get_db)) -> MetadataStore:
    return MetadataStore(db)


def authenticate(headers: Mapping[str, str]) -> uuid.UUID:
    """Resolve the caller's user id from the bearer token, or fail with 401"""
    try:
        token = get_bearer_token(headers)
    except AuthError as e:
        raise HTTPException(status_code=401, detail="Couldn't find JWT") from e

    try:
        return validate_jwt(token, settings.JWT_SECRET)
    except AuthError as e:
        raise HTTPException(status_code=401, detail="Couldn't validate JWT") from e


def get_current_user_id(request: Request) -> uuid.UUID:
    return authenticate(request.headers)


def parse_video_id(video_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(video_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid video ID") from e


def local_base_url() -> str:
    return f"http://localhost:{settings.PORT}"


@lru_cache()
def get_uploader() -> ObjectUploader:
    return S3Uploader(S3Config.from_settings())


@lru_cache()
def get_thumbnail_store() -> ThumbnailStore:
    backend = settings.THUMBNAIL_STORAGE.lower()
    if backend == "disk":
        return DiskThumbnailStore(settings.ASSETS_ROOT, local_base_url())
    if backend == "memory":
        return MemoryThumbnailStore(local_base_url())
    raise ValueError(f"Unknown thumbnail storage backend: {settings.THUMBNAIL_STORAGE}")


def limit_body(request: Request, limit: int) -> Request:
    """
    Wrap a request so reading more than `limit` body bytes fails with 413.

    Counts the raw ASGI body, so chunked requests without a Content-Length
    and every multipart part are covered, and parsing stops at the limit.
    """
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > limit:
        raise HTTPException(status_code=413, detail="Request body too large")

    receive = request.receive
    received = 0

    async def limited_receive():
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > limit:
                raise HTTPException(status_code=413, detail="Request body too large")
        return message

    return Request(request.scope, limited_receive)
