from abc import ABC, abstractmethod
import uuid
from typing import Optional, Tuple


class StorageError(Exception):
    """Raised when media cannot be written to its backing store"""


class ObjectUploader(ABC):
    """Abstract object storage interface"""
    @abstractmethod
    def put_object(self, local_path: str, object_key: str, content_type: str) -> str:
        pass


class ThumbnailStore(ABC):
    """Abstract thumbnail storage interface"""
    @abstractmethod
    def save(self, video_id: uuid.UUID, data: bytes, media_type: str) -> str:
        """Store the image and return the URL it will be served from"""
        pass

    def get(self, video_id: uuid.UUID) -> Optional[Tuple[bytes, str]]:
        return None

    def delete(self, video_id: uuid.UUID) -> None:
        pass
