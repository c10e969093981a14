import base64
import logging
import os
import secrets
import threading
import uuid
from typing import Dict, Optional, Tuple

from tubely.services.storage.interfaces import StorageError, ThumbnailStore

logger = logging.getLogger(__name__)


def random_name() -> str:
    """32 random bytes, base64url encoded without padding"""
    return base64.urlsafe_b64encode(secrets.token_bytes(32)).rstrip(b"=").decode("ascii")


def extension_for(media_type: str) -> str:
    return media_type.split("/")[-1]


class DiskThumbnailStore(ThumbnailStore):
    """Writes thumbnails under the assets root, served by the /assets mount"""

    def __init__(self, assets_root: str, base_url: str):
        self.assets_root = assets_root
        self.base_url = base_url.rstrip("/")

    def save(self, video_id: uuid.UUID, data: bytes, media_type: str) -> str:
        file_name = f"{random_name()}.{extension_for(media_type)}"
        file_path = os.path.join(self.assets_root, file_name)
        try:
            os.makedirs(self.assets_root, exist_ok=True)
            with open(file_path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"Unable to write thumbnail to {file_path}: {e}") from e

        logger.info("Stored thumbnail for video %s at %s", video_id, file_path)
        return f"{self.base_url}/assets/{file_name}"


class MemoryThumbnailStore(ThumbnailStore):
    """
    Keeps thumbnails in a process-wide map keyed by video id.

    Nothing is evicted or persisted; everything is lost on restart.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self._thumbnails: Dict[uuid.UUID, Tuple[bytes, str]] = {}
        self._lock = threading.Lock()

    def save(self, video_id: uuid.UUID, data: bytes, media_type: str) -> str:
        with self._lock:
            self._thumbnails[video_id] = (data, media_type)
        return f"{self.base_url}/api/thumbnails/{video_id}"

    def get(self, video_id: uuid.UUID) -> Optional[Tuple[bytes, str]]:
        with self._lock:
            return self._thumbnails.get(video_id)

    def delete(self, video_id: uuid.UUID) -> None:
        with self._lock:
            self._thumbnails.pop(video_id, None)

    def clear(self) -> None:
        with self._lock:
            self._thumbnails.clear()
