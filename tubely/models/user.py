"""
User model
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from tubely.models.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    videos = relationship("Video", back_populates="owner", cascade="all, delete-orphan")
