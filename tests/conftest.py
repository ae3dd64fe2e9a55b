"""
Bookmarks API - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment is pointed at a throwaway SQLite file before any
       application module is imported, so the engine and settings
       singletons are built for tests.

Fixture Hierarchy:
    Session-scoped:
    ├── test_storage_dir: temp directory holding the SQLite file, removed at exit
    └── test_database: tables created once, dropped and engine disposed at exit

    Function-scoped:
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── make_user / make_bookmark: transient ORM rows for unit tests
    ├── client: httpx AsyncClient over ASGITransport, rows reset per test
    └── auth_headers / other_auth_headers: bearer headers for two users
"""

import os
import shutil
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup (before any bookmarks_api import)
# ══════════════════════════════════════════════════════════════════════════

_TEST_DIR = tempfile.mkdtemp(prefix="bookmarks_api_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["JWT_SECRET"] = "test-secret-key-not-for-production"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from bookmarks_api.database import dispose_engine, drop_models, init_models, reset_database  # noqa: E402
from bookmarks_api.models import Bookmark, User  # noqa: E402
from bookmarks_api.security import hash_password  # noqa: E402

DEFAULT_PASSWORD = "123"


# ══════════════════════════════════════════════════════════════════════════
# Session-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture(scope="session", autouse=True)
def test_storage_dir():
    """Temporary directory for the SQLite database; deleted after the run."""
    yield _TEST_DIR
    shutil.rmtree(_TEST_DIR, ignore_errors=True)


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def test_database(test_storage_dir):
    """
    Creates the tables once for the run; drops them and closes the engine
    at teardown.

    NullPool means no connection outlives the loop that opened it, so tests
    running on their own function-scoped loops can share this engine.
    """
    await init_models()
    yield
    await drop_models()
    await dispose_engine()


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
        result = await user_service.edit_user(mock_db_session, 1, patch)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_user():
    """Factory for transient User rows with every column populated."""

    def _make(user_id: int = 1, email: str = "femi@example.com", password: str = DEFAULT_PASSWORD, **fields):
        now = datetime.now(timezone.utc)
        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=fields.get("first_name"),
            last_name=fields.get("last_name"),
        )
        user.id = user_id
        user.created_at = now
        user.updated_at = now
        return user

    return _make


@pytest.fixture
def make_bookmark():
    """Factory for transient Bookmark rows."""

    def _make(bookmark_id: int = 1, user_id: int = 1, **fields):
        now = datetime.now(timezone.utc)
        bookmark = Bookmark(
            user_id=user_id,
            title=fields.get("title", "First bookmark"),
            link=fields.get("link", "http://github.com/imef-femi"),
            description=fields.get("description"),
        )
        bookmark.id = bookmark_id
        bookmark.created_at = now
        bookmark.updated_at = now
        return bookmark

    return _make


@pytest.fixture
def query_result():
    """Factory for MagicMocks shaped like the Result of AsyncSession.execute."""

    def _make(value):
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        result.scalars.return_value.all.return_value = value if isinstance(value, list) else []
        return result

    return _make


# ══════════════════════════════════════════════════════════════════════════
# End-to-End Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def client(test_database):
    """HTTP client bound to the ASGI app; every row is deleted before the test."""
    from bookmarks_api.main import app

    await reset_database()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


async def signup_and_signin(http_client: AsyncClient, email: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Create an account and return an Authorization header for it."""
    response = await http_client.post("/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    response = await http_client.post("/auth/signin", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest_asyncio.fixture
async def auth_headers(client):
    """Bearer header for femi@example.com."""
    return await signup_and_signin(client, "femi@example.com")


@pytest_asyncio.fixture
async def other_auth_headers(client):
    """Bearer header for a second, unrelated user."""
    return await signup_and_signin(client, "ada@example.com", "s3cret")
