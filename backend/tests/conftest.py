"""
Trazure Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment is pointed at a throwaway SQLite database and uploads
       directory BEFORE any trazure import, so the module-level settings
       and engine pick them up.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:  AsyncMock session for service unit tests
    ├── database:         Fresh schema in the SQLite test database
    ├── seeded_users:     Users 1 and 2, plus a soft-deleted user 3
    ├── web_config:       WebConfig with a per-test uploads directory
    ├── test_client:      HTTPX AsyncClient talking to create_app(web_config)
    └── sample_image_bytes: Minimal valid PNG for upload tests
"""

import base64
import os
import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
_test_dir = tempfile.mkdtemp(prefix="trazure_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test.db"
os.environ["UPLOADS_DIR"] = os.path.join(_test_dir, "uploads")
os.environ["ENABLE_DIAGNOSTICS"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402

from trazure.config import settings  # noqa: E402
from trazure.database import Base, async_session_factory, engine  # noqa: E402
from trazure.main import create_app  # noqa: E402
from trazure.models import Footprint, User  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Service tests patch the repository classes, so the session itself is
    only checked for rollback calls.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_footprint_data():
    """Column values for a persisted footprint row."""
    now = datetime.now(timezone.utc)
    return {
        "id": 1,
        "user_id": 1,
        "latitude": Decimal("31.2300000"),
        "longitude": Decimal("121.4700000"),
        "location_name": "Shanghai",
        "country_code": "CN",
        "mood": "happy",
        "is_bucket_list": False,
        "meta_data": None,
        "visit_time": now,
        "created_at": now,
        "updated_at": now,
    }


@pytest_asyncio.fixture
async def database():
    """Creates all tables before the test and drops them afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def seeded_users(database):
    """Users are provisioned out-of-band; tests insert them directly."""
    async with async_session_factory() as session:
        session.add_all([
            User(
                id=1,
                username="JackLawrence",
                email="jack@example.com",
                password_hash="$2b$12$notarealhashnotarealhashnotarealhashnotarea",
                is_paid=True,
            ),
            User(
                id=2,
                username="rose",
                email="rose@example.com",
                password_hash="$2b$12$anotherfakehashanotherfakehashanotherfakeh",
            ),
            User(
                id=3,
                username="ghost",
                password_hash="$2b$12$deleteduserhashdeleteduserhashdeleteduserh",
                is_deleted=True,
            ),
        ])
        await session.commit()
    return [1, 2]


@pytest.fixture
def web_config(tmp_path):
    """Web configuration with diagnostics on and a per-test uploads directory."""
    return settings.web_config().model_copy(
        update={"uploads_dir": tmp_path / "uploads", "diagnostics_enabled": True}
    )


@pytest_asyncio.fixture
async def test_client(web_config, seeded_users):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(web_config)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def footprint_count():
    """Direct row count, bypassing the API."""

    async def _count() -> int:
        async with async_session_factory() as session:
            result = await session.execute(select(func.count(Footprint.id)))
            return result.scalar_one()

    return _count


@pytest.fixture
def sample_image_bytes():
    """
    A complete 1x1 PNG (signature, IHDR, IDAT, IEND).

    libmagic identifies it as image/png, so it passes content sniffing.
    """
    return base64.b64decode(
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
    )
