"""
Pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fish_follow.auth.middleware import CurrentUser
from fish_follow.auth.rbac import Role
from fish_follow.config import Settings, get_settings
from fish_follow.contacts.models import Contact, ContactGender, ContactYear
from fish_follow.follow_up.models import FollowUpStatus
from fish_follow.main import app
from fish_follow.organizations.models import Organization
from fish_follow.shared.database import Base, get_db_session
from fish_follow.users.models import User, UserRole

TEST_SECRET = "test-secret-key-for-testing-only"

ContactFactory = Callable[..., Awaitable[Contact]]


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        app_env="dev",
        debug=True,
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=TEST_SECRET,
        jwt_algorithm="HS256",
    )


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory database shared by every session of a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def organization(db_session: AsyncSession) -> Organization:
    org = Organization(name="Campus Outreach", country="US", strategy="Campus")
    db_session.add(org)
    await db_session.commit()
    return org


@pytest_asyncio.fixture
async def other_organization(db_session: AsyncSession) -> Organization:
    org = Organization(name="Other Ministry", country="CA", strategy="City")
    db_session.add(org)
    await db_session.commit()
    return org


@pytest_asyncio.fixture
async def follow_up_statuses(db_session: AsyncSession) -> list[FollowUpStatus]:
    """Seed the pipeline with three stages."""
    statuses = [
        FollowUpStatus(number=1, description="Not contacted"),
        FollowUpStatus(number=2, description="Contacted"),
        FollowUpStatus(number=3, description="Meeting scheduled"),
    ]
    db_session.add_all(statuses)
    await db_session.commit()
    return statuses


@pytest.fixture
def make_contact(db_session: AsyncSession, organization: Organization) -> ContactFactory:
    """Factory inserting a contact with sensible defaults."""
    counter = {"n": 0}

    async def _make(**overrides: Any) -> Contact:
        counter["n"] += 1
        values: dict[str, Any] = {
            "first_name": "Test",
            "last_name": f"Person{counter['n']}",
            "phone_number": f"555-010-{counter['n']:04d}",
            "email": None,
            "campus": "North",
            "major": "Biology",
            "year": ContactYear.FIRST,
            "gender": ContactGender.FEMALE,
            "is_interested": True,
            "follow_up_status_number": None,
            "notes": None,
            "org_id": organization.id,
        }
        values.update(overrides)
        contact = Contact(**values)
        db_session.add(contact)
        await db_session.commit()
        await db_session.refresh(contact)
        return contact

    return _make


@pytest.fixture
def current_user(organization: Organization) -> CurrentUser:
    return CurrentUser(id=uuid4(), email="staff@example.com", role="staff", org_id=organization.id)


def make_token(
    user_id: UUID,
    org_id: UUID,
    role: str = "staff",
    token_type: str = "access",
    expires_in: timedelta = timedelta(minutes=30),
    secret: str = TEST_SECRET,
) -> str:
    """Sign a session token the way the login flow does."""
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": str(user_id),
        "org_id": str(org_id),
        "email": "user@example.com",
        "role": role,
        "type": token_type,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def auth_headers(current_user: CurrentUser) -> dict[str, str]:
    token = make_token(current_user.id, current_user.org_id, role="staff")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(current_user: CurrentUser) -> dict[str, str]:
    token = make_token(current_user.id, current_user.org_id, role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def async_client(
    db_session: AsyncSession,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with the test database and settings."""

    async def _override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = _override_get_db_session
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def token_factory() -> Callable[..., str]:
    return make_token


@pytest.fixture
def mock_request() -> MagicMock:
    """Create a mock FastAPI request."""
    request = MagicMock()
    request.url.path = "/test/endpoint"
    request.method = "GET"
    return request


UserFactory = Callable[..., Awaitable[User]]


@pytest.fixture
def make_user(db_session: AsyncSession, organization: Organization) -> UserFactory:
    """Factory inserting a user with a role in the default organization."""
    counter = {"n": 0}

    async def _make(role: str = "staff", org_id: UUID | None = None, **overrides: Any) -> User:
        counter["n"] += 1
        values: dict[str, Any] = {
            "username": f"user{counter['n']:02d}",
            "email": f"user{counter['n']:02d}@example.com",
        }
        values.update(overrides)
        user = User(**values)
        db_session.add(user)
        await db_session.flush()
        db_session.add(
            UserRole(org_id=org_id or organization.id, user_id=user.id, role=Role(role))
        )
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make
