"""
Pytest configuration for Tubely tests
"""

import asyncio
import os
import tempfile
import uuid
from datetime import timedelta
from pathlib import Path
from unittest.mock import Mock

import pytest

# Settings are read at import time
_SCRATCH = tempfile.mkdtemp(prefix="tubely-tests-")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("S3_BUCKET", "test-bucket")
os.environ.setdefault("S3_REGION", "us-east-2")
os.environ.setdefault("S3_CF_DISTRIBUTION", "https://cdn.example.com")
os.environ.setdefault("DB_PATH", os.path.join(_SCRATCH, "tubely.db"))
os.environ.setdefault("ASSETS_ROOT", os.path.join(_SCRATCH, "assets"))

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tubely.api.deps import get_thumbnail_store, get_uploader  # noqa: E402
from tubely.core.auth import hash_password, make_jwt  # noqa: E402
from tubely.core.config import settings  # noqa: E402
from tubely.core.database import Base, get_db  # noqa: E402
from tubely.main import app  # noqa: E402
from tubely.models import refresh_token, user, video  # noqa: E402,F401
from tubely.models.video import Video  # noqa: E402
from tubely.services.metadata_store import MetadataStore  # noqa: E402
from tubely.services.storage import DiskThumbnailStore, ObjectUploader  # noqa: E402


@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs"""
    with tempfile.TemporaryDirectory() as tmpdirname:
        yield Path(tmpdirname)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def store(session_factory):
    db = session_factory()
    try:
        yield MetadataStore(db)
    finally:
        db.close()


@pytest.fixture
def thumbnail_store(temp_dir):
    return DiskThumbnailStore(str(temp_dir / "assets"), "http://localhost:8091")


@pytest.fixture
def uploader():
    mock_uploader = Mock(spec=ObjectUploader)
    mock_uploader.put_object.side_effect = lambda local_path, key, content_type: key
    return mock_uploader


@pytest.fixture
def client(session_factory, thumbnail_store, uploader):
    """Test client wired to an in-memory database and mocked storage"""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_thumbnail_store] = lambda: thumbnail_store
    app.dependency_overrides[get_uploader] = lambda: uploader
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(store):
    """Create a user and return (user, auth headers)"""
    def _make_user(email=None, password="hunter2"):
        email = email or f"{uuid.uuid4().hex[:8]}@example.com"
        created = store.create_user(email, hash_password(password))
        token = make_jwt(created.id, settings.JWT_SECRET, timedelta(hours=1))
        return created, {"Authorization": f"Bearer {token}"}
    return _make_user


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com")


@pytest.fixture
def draft_video(store, owner):
    owner_user, _ = owner
    return store.create_video(owner_user.id, "Boots on the ground", "A draft")


@pytest.fixture
def fetch_video(session_factory):
    """Read a video record through a fresh session"""
    def _fetch(video_id):
        db = session_factory()
        try:
            return db.get(Video, video_id)
        finally:
            db.close()
    return _fetch


@pytest.fixture
def chunked_multipart():
    """Build a multipart body as a generator so it is sent without Content-Length"""
    boundary = "tubely-test-boundary"

    def _build(parts):
        def chunks():
            for name, filename, content_type, data in parts:
                yield (
                    f"--{boundary}\r\n"
                    f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
                    f"Content-Type: {content_type}\r\n\r\n"
                ).encode()
                yield data
                yield b"\r\n"
            yield f"--{boundary}--\r\n".encode()

        return chunks(), {"Content-Type": f"multipart/form-data; boundary={boundary}"}
    return _build


def _on_event_loop():
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


@pytest.fixture
def store_calls(monkeypatch):
    """Record each get_video/update_video call and whether it ran on the event loop"""
    calls = []
    for name in ("get_video", "update_video"):
        original = getattr(MetadataStore, name)

        def spy(self, arg, _original=original, _name=name):
            calls.append((_name, _on_event_loop()))
            return _original(self, arg)

        monkeypatch.setattr(MetadataStore, name, spy)
    return calls
