"""
Shared fixtures for the payments service test suite.

Storage-backed tests run against a throwaway SQLite file so that concurrent
sessions behave like independent connections to a real database.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncIterator, Iterator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payments_service.core.config import Settings
from payments_service.db.session import build_engine, build_session_factory, init_models
from payments_service.main import create_application
from payments_service.models.payment import Payment, PaymentStatus
from payments_service.services.outcome_evaluator import OutcomeEvaluator
from payments_service.services.payment_repository import SqlAlchemyPaymentRepository
from payments_service.services.payment_service import PaymentService

TEST_CLIENT_ID = "test-client"
TEST_CLIENT_SECRET = "test-client-secret"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'payments.db'}",
        secret_key="test-secret-key-for-testing-only",
        auth_client_id=TEST_CLIENT_ID,
        auth_client_secret=TEST_CLIENT_SECRET,
        admission_reread_delay_seconds=0,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def session_factory(test_settings: Settings) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = build_engine(test_settings)
    await init_models(engine)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def repository(session_factory) -> SqlAlchemyPaymentRepository:
    return SqlAlchemyPaymentRepository(session_factory)


@pytest.fixture
def evaluator() -> OutcomeEvaluator:
    return OutcomeEvaluator()


@pytest.fixture
def payment_service(repository, evaluator) -> PaymentService:
    return PaymentService(repository, evaluator, reread_attempts=5, reread_delay_seconds=0.01)


@pytest.fixture
def mock_repository() -> AsyncMock:
    """Repository double: nothing stored, inserts echo the payment back."""
    repo = AsyncMock(spec=SqlAlchemyPaymentRepository)
    repo.find_by_reference.return_value = None
    repo.insert.side_effect = lambda payment: payment
    return repo


@pytest.fixture
def stored_payment() -> Payment:
    return Payment(
        id="0b8f6a9e-3f0e-4a7c-9d7e-2a4b1c9e5f10",
        reference_id="ref-duplicate",
        amount=Decimal("250.0000"),
        currency="EUR",
        status=PaymentStatus.COMPLETED,
        failure_reason=None,
        created_at=datetime(2026, 1, 5, 12, 30, tzinfo=timezone.utc),
        updated_at=None,
    )


@pytest.fixture
def client_credentials() -> dict[str, str]:
    return {"clientId": TEST_CLIENT_ID, "clientSecret": TEST_CLIENT_SECRET}


@pytest.fixture
def client(test_settings: Settings) -> Iterator[TestClient]:
    application = create_application(test_settings)
    with TestClient(application) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client: TestClient, client_credentials: dict[str, str]) -> dict[str, str]:
    response = client.post(
        "/api/auth/token",
        json=client_credentials,
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
