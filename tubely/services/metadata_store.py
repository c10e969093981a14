"""
Metadata store accessor over the SQLAlchemy session
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from tubely.models.refresh_token import RefreshToken
from tubely.models.user import User
from tubely.models.video import Video

logger = logging.getLogger(__name__)

REFRESH_TOKEN_TTL = timedelta(days=60)


def _utcnow() -> datetime:
    # SQLite stores naive timestamps
    return datetime.now(timezone.utc).replace(tzinfo=None)


class MetadataStore:
    """Reads and writes users, videos and refresh tokens"""

    def __init__(self, db: Session):
        self.db = db

    # Users

    def create_user(self, email: str, hashed_password: str) -> User:
        user = User(email=email, hashed_password=hashed_password)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    # Videos

    def create_video(self, user_id: uuid.UUID, title: str, description: str = "") -> Video:
        video = Video(user_id=user_id, title=title, description=description)
        self.db.add(video)
        self.db.commit()
        self.db.refresh(video)
        return video

    def get_video(self, video_id: uuid.UUID) -> Optional[Video]:
        return self.db.get(Video, video_id)

    def get_videos(self, user_id: uuid.UUID) -> List[Video]:
        return (
            self.db.query(Video)
            .filter(Video.user_id == user_id)
            .order_by(Video.created_at.desc())
            .all()
        )

    def update_video(self, video: Video) -> Video:
        """Persist changes made to a video record"""
        try:
            self.db.add(video)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(video)
        return video

    def delete_video(self, video: Video) -> None:
        self.db.delete(video)
        self.db.commit()

    # Refresh tokens

    def create_refresh_token(self, token: str, user_id: uuid.UUID) -> RefreshToken:
        refresh_token = RefreshToken(
            token=token,
            user_id=user_id,
            expires_at=_utcnow() + REFRESH_TOKEN_TTL,
        )
        self.db.add(refresh_token)
        self.db.commit()
        return refresh_token

    def get_user_for_refresh_token(self, token: str) -> Optional[User]:
        """Return the owner of a token that is neither expired nor revoked"""
        refresh_token = self.db.get(RefreshToken, token)
        if refresh_token is None or refresh_token.revoked_at is not None:
            return None
        if refresh_token.expires_at <= _utcnow():
            return None
        return self.get_user(refresh_token.user_id)

    def revoke_refresh_token(self, token: str) -> bool:
        refresh_token = self.db.get(RefreshToken, token)
        if refresh_token is None:
            return False
        refresh_token.revoked_at = _utcnow()
        self.db.commit()
        return True

    def reset(self) -> None:
        """Delete every row; only wired up on the dev platform"""
        self.db.query(RefreshToken).delete()
        self.db.query(Video).delete()
        self.db.query(User).delete()
        self.db.commit()
        logger.info("Database reset")
