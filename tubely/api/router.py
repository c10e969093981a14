from fastapi import APIRouter

from tubely.api.endpoints import health, thumbnails, users, video_upload, videos

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])

# Accounts and tokens
api_router.include_router(users.router, tags=["users"])

# Video metadata
api_router.include_router(videos.router, prefix="/videos", tags=["videos"])

# Media uploads
api_router.include_router(thumbnails.router, tags=["thumbnails"])
api_router.include_router(video_upload.router, tags=["uploads"])
