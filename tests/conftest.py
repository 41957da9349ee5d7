"""
Shared fixtures: settings pointed at the local backend in a temp directory.
"""

import pytest
from fastapi.testclient import TestClient

from profile_sync import config


TEST_TOKEN = "test-bearer-token-123"


@pytest.fixture
def local_settings(monkeypatch, tmp_path):
    """Settings for the local JSON backend rooted at tmp_path"""
    monkeypatch.setenv("EVENT_BEARER_TOKEN", TEST_TOKEN)
    monkeypatch.setenv("SYNC_BACKEND", "local")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.delenv("PROFILES_COLLECTION", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    settings = config.reload_settings()
    yield settings
    config.settings = None


@pytest.fixture
def client(local_settings):
    """TestClient with startup handlers run"""
    from profile_sync.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TEST_TOKEN}"}
