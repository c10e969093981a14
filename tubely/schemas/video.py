import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""


class VideoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    title: str
    description: str
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    user_id: uuid.UUID
