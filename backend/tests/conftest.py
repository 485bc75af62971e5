"""
Wardrobe Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   API tests get a fresh application per test, bound to a throwaway
       SQLite file (aiosqlite) with a known JWT secret and cheap bcrypt cost.
       Service tests get a mocked AsyncSession.

Fixture Hierarchy (all function-scoped):
    ├── settings: Settings pointing at tmp_path/test.db
    ├── fake_magic: replaces libmagic detection with a signature table
    ├── app: create_app(settings) with tables created
    ├── client: HTTPX AsyncClient over ASGITransport
    ├── auth_headers: bearer header for a freshly registered user
    ├── upload_garment: helper posting a multipart upload
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    └── sample_*_bytes: minimal files with real leading signatures

ASGITransport does not run lifespan events, so the `app` fixture creates the
schema and disposes the engine itself.
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Importing wardrobe.main builds a module-level app from the environment;
# keep it off any real database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CREATE_SCHEMA"] = "false"

from wardrobe.config import Settings  # noqa: E402
from wardrobe.main import create_app  # noqa: E402
from wardrobe.services.content_classifier import ContentClassifier  # noqa: E402

TEST_JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"


# ══════════════════════════════════════════════════════════════════════════
# Sample Content
# ══════════════════════════════════════════════════════════════════════════

JPEG_BYTES = (
    b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
    b"\xff\xd9"
)
PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00"
MP3_BYTES = b"ID3\x03\x00\x00\x00\x00\x00\x00" + b"\x00" * 32
UNKNOWN_BYTES = b"\x00\x13\x37\x00garbage-without-any-signature\x01\x02"

_SIGNATURES = [
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"%PDF-", "application/pdf"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"ID3", "audio/mpeg"),
]


def fake_detect_mime(self, content: bytes) -> str:
    """Signature lookup used in place of libmagic in API tests."""
    for prefix, mime in _SIGNATURES:
        if content.startswith(prefix):
            return mime
    return "application/octet-stream"


@pytest.fixture
def sample_jpeg_bytes():
    return JPEG_BYTES


@pytest.fixture
def sample_pdf_bytes():
    return PDF_BYTES


@pytest.fixture
def sample_png_bytes():
    return PNG_BYTES


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        create_schema=False,
        log_level="WARNING",
    )


@pytest.fixture
def fake_magic(monkeypatch):
    """Content sniffing without libmagic installed."""
    monkeypatch.setattr(ContentClassifier, "detect_mime", fake_detect_mime)


@pytest_asyncio.fixture
async def app(settings, fake_magic):
    application = create_app(settings)
    await application.state.database.create_schema()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Usage:
        async def test_health(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def registered_user(client):
    """Registers `ana` (dancer) and returns her credentials."""
    credentials = {"username": "ana", "password": "s3cret-pass", "role": "dancer"}
    response = await client.post("/users", json=credentials)
    assert response.status_code == 201
    return credentials


@pytest_asyncio.fixture
async def auth_headers(client, registered_user):
    response = await client.post(
        "/users/login",
        json={"username": registered_user["username"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def upload_garment(client):
    """
    Returns an async helper:
        response = await upload_garment("kilt.jpg", "image", JPEG_BYTES)
    """
    async def _upload(name, logical_type, content, filename=None):
        data = {}
        if name is not None:
            data["name"] = name
        if logical_type is not None:
            data["logical_type"] = logical_type
        files = None
        if content is not None:
            files = {"file": (filename or name or "upload.bin", content, "application/octet-stream")}
        return await client.post("/garments", data=data, files=files)

    return _upload


# ══════════════════════════════════════════════════════════════════════════
# Service-Level Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession. Existence predicates go through `scalar`; writes
    through `execute`, `add` and `flush`.

    Usage:
        mock_db_session.scalar.return_value = None   # row does not exist
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalar = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session
