"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- In-memory database for testing
- Mock reminder notifier and exchange-rate client
- A fixed clock (2024-03-15 10:00) so effective statuses are deterministic
"""

from datetime import datetime
from typing import AsyncGenerator, Callable, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from installment_billing.main import app
from installment_billing.application.services import RateTableProvider
from installment_billing.core.dependencies import (
    get_clock,
    get_exchange_rate_client,
    get_notifier,
    get_rate_provider,
)
from installment_billing.domain.entities import InstallmentPayment, PaymentReminder
from installment_billing.domain.exceptions import ExchangeRateAPIException
from installment_billing.domain.interfaces import ExchangeRateClient, ReminderNotifier
from installment_billing.infrastructure.database import Base, get_db_session
from installment_billing.service.billing import RateTable

FIXED_NOW = datetime(2024, 3, 15, 10, 0)


# =============================================================================
# Mock Clients
# =============================================================================

class MockReminderNotifier(ReminderNotifier):
    """Mock notifier that records deliveries."""

    def __init__(self, fail_mode: bool = False):
        self.fail_mode = fail_mode
        self.call_count = 0
        self.delivered: List[dict] = []

    async def send_reminder(
        self,
        reminder: PaymentReminder,
        payment: Optional[InstallmentPayment] = None,
    ) -> bool:
        self.call_count += 1

        if self.fail_mode:
            return False

        self.delivered.append({
            "reminder_id": str(reminder.id),
            "payment_id": str(reminder.payment_id),
            "reminder_type": reminder.reminder_type.value,
            "amount": str(payment.amount) if payment else None,
        })
        return True


class MockExchangeRateClient(ExchangeRateClient):
    """Mock exchange-rate API returning fixed rates, or failing."""

    def __init__(self, rates: Optional[dict] = None, fail_mode: bool = False):
        self.rates = rates or {"USD": 0.02, "EUR": 0.015}
        self.fail_mode = fail_mode
        self.call_count = 0

    async def fetch_rates(self, current: RateTable) -> RateTable:
        self.call_count += 1

        if self.fail_mode:
            raise ExchangeRateAPIException("Exchange rate API unavailable", status_code=500)

        return current.with_rates(self.rates, as_of=FIXED_NOW.date())


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session shared by every request of a test."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def mock_notifier() -> MockReminderNotifier:
    return MockReminderNotifier()


@pytest.fixture
def mock_exchange_client() -> MockExchangeRateClient:
    return MockExchangeRateClient()


@pytest.fixture
def rate_provider() -> RateTableProvider:
    """A fresh provider per test so refreshes don't leak between tests."""
    return RateTableProvider()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


# =============================================================================
# App Client Fixtures
# =============================================================================

def _override(
    session: AsyncSession,
    notifier: ReminderNotifier,
    exchange_client: ExchangeRateClient,
    provider: RateTableProvider,
    clock: Callable[[], datetime],
) -> None:
    async def override_get_db_session():
        yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_exchange_rate_client] = lambda: exchange_client
    app.dependency_overrides[get_rate_provider] = lambda: provider
    app.dependency_overrides[get_clock] = lambda: clock


@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    mock_notifier: MockReminderNotifier,
    mock_exchange_client: MockExchangeRateClient,
    rate_provider: RateTableProvider,
    fixed_clock: Callable[[], datetime],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses an in-memory SQLite database
    - Mocks the reminder notifier and the exchange-rate API
    - Pins "now" to FIXED_NOW
    """
    _override(test_session, mock_notifier, mock_exchange_client, rate_provider, fixed_clock)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_with_failing_ports(
    test_session: AsyncSession,
    rate_provider: RateTableProvider,
    fixed_clock: Callable[[], datetime],
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose notifier and exchange-rate API always fail."""
    _override(
        test_session,
        MockReminderNotifier(fail_mode=True),
        MockExchangeRateClient(fail_mode=True),
        rate_provider,
        fixed_clock,
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def interest_plan_request() -> dict:
    """10000 total, 1000 down, 6 months at 12% a year."""
    return {
        "customer_id": "cust_1001",
        "customer_name": "Maria Santos",
        "total_amount": 10000,
        "down_payment": 1000,
        "term_months": 6,
        "interest_rate": 12,
        "start_date": "2024-01-15",
    }


@pytest.fixture
def interest_free_plan_request() -> dict:
    """12000 over 12 months, no interest, first payment due 2024-02-10."""
    return {
        "customer_id": "cust_2002",
        "total_amount": 12000,
        "term_months": 12,
        "start_date": "2024-01-10",
    }


async def _create_plan(client: AsyncClient, body: dict) -> dict:
    response = await client.post("/v1/plans", json=body)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def create_plan():
    """POST a plan and return the response body."""
    return _create_plan
