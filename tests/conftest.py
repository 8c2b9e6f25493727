"""
Shared pytest fixtures for all test modules.

Provider credentials are stubbed so integration modules never short-circuit
on "not configured"; every provider call itself is mocked.
"""

import io
import os
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

os.environ.setdefault("SIGHTENGINE_API_USER", "stub-user")
os.environ.setdefault("SIGHTENGINE_API_SECRET", "stub-secret")
os.environ.setdefault("SERPAPI_API_KEY", "stub-serpapi-key")

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from tests.mocks.firebase_mock import MockBucket, MockFirestore
from tests.mocks.redis_mock import MockRedis

from app.core.auth import AuthenticatedUser, get_current_user  # noqa: E402
from app.main import app  # noqa: E402

TEST_USER = AuthenticatedUser(uid="user-123", email="recycler@example.com")


# ---------------------------------------------------------------------------
# Core infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    from app.core.rate_limiter import _rate_limits

    _rate_limits.clear()
    yield
    _rate_limits.clear()


@pytest.fixture
def mock_firebase(monkeypatch):
    """Replace firebase.db with an in-memory MockFirestore."""
    from app.integrations import firebase as fb

    mock_db = MockFirestore()
    monkeypatch.setattr(fb, "db", mock_db)
    return mock_db


@pytest.fixture
def mock_bucket(monkeypatch):
    """Replace firebase.bucket with an in-memory MockBucket."""
    from app.integrations import firebase as fb

    bucket = MockBucket()
    monkeypatch.setattr(fb, "bucket", bucket)
    return bucket


@pytest.fixture
def mock_redis(monkeypatch):
    """Replace redis_client.client with an in-memory MockRedis."""
    from app.integrations import redis_client as rc

    mock_rc = MockRedis()
    monkeypatch.setattr(rc, "client", mock_rc)
    return mock_rc


@pytest.fixture
def client(mock_firebase, mock_bucket, mock_redis):
    """
    FastAPI TestClient with mocked Firebase, Storage and Redis.

    initialize() calls are patched to no-ops so they can't overwrite our mocks
    or attempt real network connections during the lifespan startup.
    """
    with (
        patch("app.integrations.firebase.initialize"),
        patch("app.integrations.redis_client.initialize"),
        patch("app.integrations.rekognition.initialize"),
    ):
        with TestClient(app, raise_server_exceptions=False) as c:
            yield c


@pytest.fixture
def auth_client(client):
    """TestClient whose requests are authenticated as TEST_USER."""
    app.dependency_overrides[get_current_user] = lambda: TEST_USER
    yield client
    app.dependency_overrides.pop(get_current_user, None)


# ---------------------------------------------------------------------------
# Shared test-data helpers
# ---------------------------------------------------------------------------


def make_tiny_jpeg() -> bytes:
    """Create a minimal 10×10 JPEG in memory — fast and valid."""
    buf = io.BytesIO()
    Image.new("RGB", (10, 10), color=(128, 128, 128)).save(buf, format="JPEG")
    return buf.getvalue()


def make_corrupt_png() -> bytes:
    """A 4×4 PNG with one IDAT byte flipped, so its chunk CRC no longer matches."""
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(10, 200, 30)).save(buf, format="PNG")
    data = bytearray(buf.getvalue())
    idat = data.index(b"IDAT")
    data[idat + 6] ^= 0xFF
    return bytes(data)


def make_mock_session(status=200, json_body=None, content=b"", text="", content_length=None):
    """Build a mock aiohttp session whose .get() returns a context-manager response."""
    mock_resp = MagicMock()
    mock_resp.__aenter__ = AsyncMock(return_value=mock_resp)
    mock_resp.__aexit__ = AsyncMock(return_value=None)
    mock_resp.status = status
    mock_resp.content_length = content_length
    mock_resp.read = AsyncMock(return_value=content)
    mock_resp.text = AsyncMock(return_value=text)
    mock_resp.json = AsyncMock(return_value=json_body)

    async def _iter_chunked(size):
        for start in range(0, len(content), size):
            yield content[start:start + size]

    mock_resp.content.iter_chunked = MagicMock(side_effect=_iter_chunked)

    mock_session = MagicMock()
    mock_session.get = MagicMock(return_value=mock_resp)
    return mock_session


def patch_session(mock_session):
    """
    Patch http_client.request_session to yield mock_session directly,
    bypassing aiohttp.ClientSession construction entirely.
    """
    @asynccontextmanager
    async def _fake_request_session():
        yield mock_session

    return patch(
        "app.integrations.http_client.request_session",
        side_effect=_fake_request_session,
    )
