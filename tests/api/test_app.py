"""
Tests for application startup
"""

from fastapi.testclient import TestClient

from tubely.core.config import settings
from tubely.main import app


def test_startup_creates_assets_root(temp_dir, monkeypatch):
    assets_root = temp_dir / "assets-root"
    monkeypatch.setattr(settings, "ASSETS_ROOT", str(assets_root))
    monkeypatch.setattr("tubely.main.init_db", lambda: None)

    assert not assets_root.exists()

    with TestClient(app) as client:
        assert assets_root.is_dir()
        assert client.get("/").status_code == 200
