from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payments_service.core.exceptions import DuplicateReferenceError, PaymentStorageError
from payments_service.core.logging import get_logger
from payments_service.models.mixins import utcnow
from payments_service.models.payment import Payment

logger = get_logger(__name__)

REFERENCE_CONSTRAINT_NAME = "uq_payments_reference_id"


class PaymentRepository(Protocol):
    async def find_by_reference(self, reference_id: str) -> Payment | None: ...

    async def insert(self, payment: Payment) -> Payment: ...

    async def update(self, payment: Payment) -> None: ...


class SqlAlchemyPaymentRepository:
    """
    Payment store backed by an async SQLAlchemy session factory.

    Every call opens its own session and commits before returning, so a
    successful insert is visible to any later read. Uniqueness on
    ``reference_id`` is enforced by the ``uq_payments_reference_id`` constraint
    and surfaced as ``DuplicateReferenceError``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_reference(self, reference_id: str) -> Payment | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Payment).where(Payment.reference_id == reference_id))
                return result.scalars().first()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("payment.store.read_failed", reference_id=reference_id, error=str(exc))
            raise PaymentStorageError(f"Failed to read payment '{reference_id}'") from exc

    async def insert(self, payment: Payment) -> Payment:
        try:
            async with self._session_factory() as session:
                session.add(payment)
                try:
                    await session.commit()
                except IntegrityError as exc:
                    await session.rollback()
                    if _is_reference_conflict(exc):
                        raise DuplicateReferenceError(payment.reference_id) from exc
                    raise
        except (SQLAlchemyError, OSError) as exc:
            logger.error("payment.store.insert_failed", reference_id=payment.reference_id, error=str(exc))
            raise PaymentStorageError(f"Failed to insert payment '{payment.reference_id}'") from exc
        return payment

    async def update(self, payment: Payment) -> None:
        payment.updated_at = utcnow()
        try:
            async with self._session_factory() as session:
                await session.merge(payment)
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("payment.store.update_failed", payment_id=payment.id, error=str(exc))
            raise PaymentStorageError(f"Failed to update payment '{payment.id}'") from exc
        logger.info("payment.store.updated", payment_id=payment.id, status=payment.status.value)


def _is_reference_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig if exc.orig is not None else exc).lower()
    if REFERENCE_CONSTRAINT_NAME in message:
        return True
    return "unique" in message and "reference_id" in message
