"""
Pytest configuration and fixtures.
"""

import os

# Settings are read once and cached, so the test environment must be in
# place before any app module is imported.
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-session-tokens-0123456789"
os.environ["OPENCAGE_API_KEY"] = ""
os.environ["GOOGLE_MAPS_API_KEY"] = ""
os.environ["LOG_FORMAT"] = "console"

from typing import AsyncGenerator  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.api.dependencies import (  # noqa: E402
    get_document_storage,
    get_geocoder,
    get_identity_provider,
    get_road_distance_client,
)
from app.application.unit_of_work import UnitOfWork  # noqa: E402
from app.data.models import Base  # noqa: E402
from app.data.repositories.user_repository import UserRepository  # noqa: E402
from app.domain_core.entities.user import User  # noqa: E402
from app.domain_core.value_objects.coordinates import Coordinates  # noqa: E402
from app.infra.auth.jwt_auth import JWTAuth  # noqa: E402
from app.infra.config.database import get_db_session  # noqa: E402
from app.infra.config.settings import get_settings  # noqa: E402
from app.infra.storage.document_storage import LocalDocumentStorage  # noqa: E402
from tests.utils.fakes import (  # noqa: E402
    FakeGeocoder,
    FakeIdentityProvider,
    FakeRoadDistance,
)

# Bengaluru city centre and two reference points around it
BENGALURU = Coordinates(12.9716, 77.5946)
NEAR_BENGALURU = Coordinates(12.9900, 77.5946)  # ~2 km north
FAR_FROM_BENGALURU = Coordinates(13.4200, 77.5946)  # ~50 km north


# ---------- DATABASE FIXTURES ----------


@pytest.fixture
async def test_db_engine():
    """In-memory database shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_db_engine):
    return async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow(test_db_session):
    return UnitOfWork.from_session(test_db_session)


@pytest.fixture
def create_user(session_factory):
    """Insert a user row and return the entity."""

    async def _create(external_id: str = None, **fields) -> User:
        user = User(id=uuid4(), external_id=external_id or f"google-{uuid4().hex}", **fields)
        async with session_factory() as session:
            await UserRepository(session).create(user)
            await session.commit()
        return user

    return _create


# ---------- PROVIDER FIXTURES ----------


@pytest.fixture
def geocoder():
    return FakeGeocoder(
        {
            "Bengaluru": BENGALURU,
            "Near Bengaluru": NEAR_BENGALURU,
            "Far From Bengaluru": FAR_FROM_BENGALURU,
        }
    )


@pytest.fixture
def road_distance():
    return FakeRoadDistance()


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def document_storage(tmp_path):
    return LocalDocumentStorage(
        root_dir=str(tmp_path / "uploads"),
        base_url="http://testserver/api/users/me/verification-document",
        max_bytes=5 * 1024 * 1024,
    )


# ---------- API TESTING FIXTURES ----------


@pytest.fixture
def app(session_factory, geocoder, road_distance, identity_provider, document_storage):
    """FastAPI application wired to the test database and fake providers."""
    from app.main import create_app

    application = create_app()

    async def _test_db_session():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = _test_db_session
    application.dependency_overrides[get_geocoder] = lambda: geocoder
    application.dependency_overrides[get_road_distance_client] = lambda: road_distance
    application.dependency_overrides[get_identity_provider] = lambda: identity_provider
    application.dependency_overrides[get_document_storage] = lambda: document_storage

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def async_client(app):
    """Async test client; runs in the same loop as the database fixtures."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as ac:
        yield ac


@pytest.fixture
def auth_headers():
    """Build bearer headers carrying a session token for ``user_id``."""

    def _headers(user_id) -> dict:
        token = JWTAuth(get_settings()).create_access_token(user_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ---------- PYTEST CONFIGURATION ----------


def pytest_configure(config):
    """Configure pytest with custom settings."""
    markers = [
        "unit: Unit tests (fast, isolated)",
        "integration: Integration tests (with a real database)",
        "e2e: End-to-end tests (full application flow)",
    ]

    for marker in markers:
        config.addinivalue_line("markers", marker)
