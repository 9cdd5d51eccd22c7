"""Shared pytest fixtures for Media Service tests."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings


# ============================================================================
# Storage Fixtures
# ============================================================================

def make_payload(size: int) -> bytes:
    """Deterministic, non-repeating-looking bytes of the given size."""
    return bytes((i * 7 + i // 256) % 256 for i in range(size))


@pytest.fixture
def storage_root(tmp_path, monkeypatch) -> Path:
    """Empty storage root wired into the global settings."""
    root = tmp_path / "uploads"
    root.mkdir()
    monkeypatch.setattr(settings, "LOCAL_STORAGE_PATH", str(root))
    monkeypatch.setattr(settings, "EVENT_TOKEN", "")
    return root


@pytest.fixture
def photo(storage_root) -> bytes:
    """A 1000-byte photo.jpg at the storage root."""
    payload = make_payload(1000)
    (storage_root / "photo.jpg").write_bytes(payload)
    return payload


@pytest.fixture
def event_token(storage_root, monkeypatch) -> str:
    """Require an event token for gallery access."""
    token = "wedding-2026-secret"
    monkeypatch.setattr(settings, "EVENT_TOKEN", token)
    return token


# ============================================================================
# Client Fixtures
# ============================================================================

@pytest.fixture
def client(storage_root):
    """Test client bound to a temporary storage root."""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client
