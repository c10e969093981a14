"""
Video metadata model
"""

from sqlalchemy import Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from tubely.models.base import BaseModel


class Video(BaseModel):
    __tablename__ = "videos"

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    thumbnail_url = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    owner = relationship("User", back_populates="videos")
