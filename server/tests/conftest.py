"""Test configuration and fixtures."""

import json
import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("RESEND_API_KEY", "re_test_key")
os.environ.setdefault("BEARER_TOKEN_SECRET", "test-secret-key-for-voyage-bearer-tokens")

from datetime import date, timedelta

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from voyage.core.database import Base, get_db
from voyage.core.security import ADMIN_ROLE, create_access_token
from voyage.models import *  # noqa: F403 - Import all models
from voyage.models import Booking
from voyage.services.email_service import EmailService, get_email_service

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


class EmailOutbox:
    """Records calls to the email provider and answers with a fixed status."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"id": f"email_{len(self.requests)}"})

    @property
    def recipients(self) -> list[str]:
        return [json.loads(request.content)["to"][0] for request in self.requests]


@pytest.fixture
def email_outbox():
    """Captured outgoing emails."""
    return EmailOutbox()


@pytest.fixture
def email_service(email_outbox):
    """Email service wired to the in-memory outbox."""
    return EmailService(transport=httpx.MockTransport(email_outbox.handler))


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session, email_service):
    """Create a test FastAPI application."""
    from voyage.main import create_app

    app = create_app()

    # Override database dependency
    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service

    yield app

    # Clean up
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    from httpx import ASGITransport
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers():
    """Bearer header for a back-office user."""
    token = create_access_token(subject="admin-1", roles=[ADMIN_ROLE], email="ops@infinityvoyagetours.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def visitor_headers():
    """Bearer header for a signed-in user without the admin role."""
    token = create_access_token(subject="user-7", roles=[])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def future_date():
    """A travel date a month from now."""
    return date.today() + timedelta(days=30)


@pytest.fixture
def sample_tour_data():
    """Sample tour data for testing."""
    return {
        "title": "5 Days Tarangire & Serengeti Safari",
        "slug": "5-days-tarangire-serengeti-safari",
        "description": "Elephant herds in Tarangire and the endless Serengeti plains",
        "duration": "5 days",
        "price": 185000,
        "category": "Wildlife Safari",
        "included": ["Park fees", "Full board"],
        "itinerary": [
            {"day": 1, "title": "Arusha to Tarangire", "activities": ["Game drive"]},
        ],
        "is_published": True,
    }


@pytest.fixture
def sample_booking_data(future_date):
    """Sample booking submission."""
    return {
        "customer_name": "Amina Mwakilema",
        "customer_email": "amina.mwakilema@gmail.com",
        "customer_phone": "+255 712 345 678",
        "travel_date": future_date.isoformat(),
        "number_of_guests": 3,
        "special_requests": "Vegetarian meals please",
    }


@pytest_asyncio.fixture
async def stored_booking(test_session, future_date):
    """Factory storing a booking with a chosen tracking code and status."""

    async def _store(tracking_code: str, status: str = "pending", **fields) -> Booking:
        booking = Booking(
            tracking_code=tracking_code,
            customer_name=fields.pop("customer_name", "Jonas Lindqvist"),
            customer_email=fields.pop("customer_email", "jonas.lindqvist@outlook.com"),
            travel_date=fields.pop("travel_date", future_date),
            number_of_guests=fields.pop("number_of_guests", 4),
            status=status,
            **fields,
        )
        test_session.add(booking)
        await test_session.commit()
        await test_session.refresh(booking)
        return booking

    return _store
