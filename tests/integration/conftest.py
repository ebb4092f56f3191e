"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool and Redis pool (both created at import time)
remain valid across the entire test session.

PostgreSQL must be migrated (alembic upgrade head). The customer service is
replaced by an in-process stub; Redis being down only costs the events.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from src.bk_account.api import router as account_api
from src.bk_account.domain.models import CustomerInfo
from src.bk_common.database import engine
from src.bk_common.errors import CustomerValidationError
from src.bk_report.api import router as report_api
from src.main import app

_INACTIVE_CUSTOMER_ID = 999_001


class StubCustomerService:
    """Every customer is active except _INACTIVE_CUSTOMER_ID."""

    async def validate_customer(self, customer_id: int) -> bool:
        if customer_id == _INACTIVE_CUSTOMER_ID:
            raise CustomerValidationError(f"Customer is inactive with ID: {customer_id}")
        return True

    async def get_customer(self, customer_id: int) -> CustomerInfo:
        return CustomerInfo(customer_id=customer_id, name="Integration Customer", active=True)


@pytest_asyncio.fixture(loop_scope="session", scope="session", autouse=True)
async def _database_available() -> None:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1 FROM accounts LIMIT 1"))
    except Exception as exc:  # noqa: BLE001
        pytest.skip(f"PostgreSQL not available for integration tests: {exc}")


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    account_api._service._customers = StubCustomerService()
    report_api._service._customers = StubCustomerService()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def inactive_customer_id() -> int:
    return _INACTIVE_CUSTOMER_ID
