"""Pytest configuration and shared fixtures.

The environment is configured before any ``assetflow`` import so the cached
settings pick up the test database and Stripe secrets.
"""

import os


os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "development"
os.environ["FRONTEND_URL"] = "http://localhost:5173"
os.environ["STRIPE_SECRET_KEY"] = ""
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_secret"
os.environ["STRIPE_PRO_PRICE_ID"] = "price_pro_test"
os.environ["STRIPE_ENTERPRISE_PRICE_ID"] = "price_enterprise_test"
os.environ["RESEND_API_KEY"] = ""

from collections.abc import AsyncGenerator  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from assetflow.core.database import Database, get_db  # noqa: E402
from assetflow.core.notifications import DeliveryResult, Mailer, get_mailer  # noqa: E402
from assetflow.main import create_app  # noqa: E402
from assetflow.modules.assets.models import Asset  # noqa: E402
from assetflow.modules.billing.stripe_client import get_stripe_client  # noqa: E402
from assetflow.modules.organizations.models import Organization  # noqa: E402
from assetflow.modules.users.models import User, UserRole  # noqa: E402
from factories.records import (  # noqa: E402
    auth_headers,
    make_asset,
    make_organization,
    make_user,
)


# ============================================================
# Test doubles
# ============================================================


class RecordingMailer(Mailer):
    """Mailer that records messages instead of calling Resend."""

    def __init__(self) -> None:
        super().__init__(api_key="re_test", sender="AssetFlow <test@example.com>")
        self.sent: list[dict[str, str]] = []

    async def send(self, to: str, subject: str, html: str) -> DeliveryResult:
        self.sent.append({"to": to, "subject": subject, "html": html})
        return DeliveryResult(delivered=True)

    def recipients(self) -> list[str]:
        return [m["to"] for m in self.sent]


class FakeStripeClient:
    """In-memory stand-in for StripeClient."""

    def __init__(self) -> None:
        self.customers: list[dict[str, Any]] = []
        self.checkout_sessions: list[dict[str, Any]] = []
        self.portal_sessions: list[dict[str, Any]] = []

    async def create_customer(
        self,
        email: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> SimpleNamespace:
        customer_id = f"cus_test_{len(self.customers) + 1}"
        self.customers.append({"id": customer_id, "email": email, "metadata": metadata})
        return SimpleNamespace(id=customer_id)

    async def create_checkout_session(self, **kwargs: Any) -> SimpleNamespace:
        session_id = f"cs_test_{len(self.checkout_sessions) + 1}"
        self.checkout_sessions.append({"id": session_id, **kwargs})
        return SimpleNamespace(id=session_id, url=f"https://checkout.stripe.test/{session_id}")

    async def create_portal_session(
        self, customer_id: str, return_url: str
    ) -> SimpleNamespace:
        self.portal_sessions.append({"customer_id": customer_id, "return_url": return_url})
        return SimpleNamespace(url="https://billing.stripe.test/portal")


# ============================================================
# Application fixtures
# ============================================================


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database per test."""
    database = Database(os.environ["DATABASE_URL"])
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
async def db(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session shared by the test body and every request it makes."""
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def stripe_client() -> FakeStripeClient:
    return FakeStripeClient()


@pytest.fixture
def app(
    database: Database,
    db: AsyncSession,
    mailer: RecordingMailer,
    stripe_client: FakeStripeClient,
) -> FastAPI:
    app = create_app(database)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_stripe_client] = lambda: stripe_client
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# Data fixtures
# ============================================================


@pytest.fixture
async def organization(db: AsyncSession) -> Organization:
    return await make_organization(db)


@pytest.fixture
async def admin(db: AsyncSession, organization: Organization) -> User:
    return await make_user(db, organization, "admin@acme.io", UserRole.ADMIN, "Ada Admin")


@pytest.fixture
async def employee(db: AsyncSession, organization: Organization) -> User:
    return await make_user(db, organization, "emp@acme.io", UserRole.EMPLOYEE, "Eve Employee")


@pytest.fixture
async def asset(db: AsyncSession, organization: Organization) -> Asset:
    return await make_asset(db, organization, location="HQ 3rd floor")


@pytest.fixture
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def employee_headers(employee: User) -> dict[str, str]:
    return auth_headers(employee)
