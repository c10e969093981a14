"""
Core configuration settings
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=Path(__file__).parents[2] / ".env", extra="ignore")

    # Basic settings
    app_name: str = "Tubely"
    PLATFORM: str = "dev"
    PORT: int = 8091
    LOG_LEVEL: str = "INFO"

    # Auth
    JWT_SECRET: str
    ACCESS_TOKEN_TTL_SECONDS: int = 3600

    # Database
    DB_PATH: str = "./tubely.db"

    # Local storage
    ASSETS_ROOT: str = "./assets"
    THUMBNAIL_STORAGE: str = "disk"  # disk, memory

    # Object storage
    S3_BUCKET: str
    S3_REGION: str
    S3_CF_DISTRIBUTION: str
    S3_ENDPOINT: Optional[str] = None
    S3_ACCESS_KEY: Optional[str] = None
    S3_SECRET_KEY: Optional[str] = None

    # Media tools
    FFPROBE_BIN: str = "ffprobe"
    FFMPEG_BIN: str = "ffmpeg"
    MEDIA_TOOL_TIMEOUT: float = 600.0

    # Upload limits
    MAX_VIDEO_UPLOAD_BYTES: int = 1 << 30
    MAX_THUMBNAIL_UPLOAD_BYTES: int = 10 << 20

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.DB_PATH}"


settings = Settings()
