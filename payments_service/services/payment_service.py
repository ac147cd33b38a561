from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from decimal import Decimal

from payments_service.core.exceptions import (
    DuplicateReferenceError,
    PaymentStorageError,
    ReferenceNotVisibleError,
)
from payments_service.core.logging import get_logger
from payments_service.models.mixins import utcnow
from payments_service.models.payment import AMOUNT_SCALE, Payment
from payments_service.schemas.payment import PaymentCreate
from payments_service.services.outcome_evaluator import OutcomeEvaluator
from payments_service.services.payment_repository import PaymentRepository

logger = get_logger(__name__)

AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)


@dataclass(frozen=True)
class AdmissionResult:
    payment: Payment
    created: bool

    @property
    def replayed(self) -> bool:
        return not self.created


class PaymentService:
    """
    Admits payments at most once per reference id.

    The lookup and the insert are not wrapped in a lock. Two admissions for
    the same reference can both miss the lookup; the store's uniqueness
    constraint rejects the second insert and the loser re-reads the winner's
    row instead of failing. A replay returns the stored row untouched, whatever
    amount or currency the new request carries.
    """

    def __init__(
        self,
        repository: PaymentRepository,
        evaluator: OutcomeEvaluator,
        *,
        reread_attempts: int = 3,
        reread_delay_seconds: float = 0.05,
    ) -> None:
        if reread_attempts < 1:
            raise ValueError("reread_attempts must be at least 1")
        self._repository = repository
        self._evaluator = evaluator
        self._reread_attempts = reread_attempts
        self._reread_delay_seconds = reread_delay_seconds

    async def admit(self, request: PaymentCreate) -> AdmissionResult:
        logger.info(
            "payment.admission.received",
            reference_id=request.reference_id,
            amount=str(request.amount),
            currency=request.currency,
        )
        existing = await self._repository.find_by_reference(request.reference_id)
        if existing is not None:
            logger.info(
                "payment.admission.replayed",
                reference_id=request.reference_id,
                payment_id=existing.id,
                status=existing.status.value,
            )
            return AdmissionResult(payment=existing, created=False)

        payment = self._build_payment(request)
        try:
            stored = await self._repository.insert(payment)
        except DuplicateReferenceError:
            logger.info("payment.admission.race_lost", reference_id=request.reference_id)
            winner = await self._reread_winner(request.reference_id)
            return AdmissionResult(payment=winner, created=False)
        except PaymentStorageError:
            # The row may have been written by a concurrent admission even
            # though the store could not say so.
            recovered = await self._repository.find_by_reference(request.reference_id)
            if recovered is None:
                raise
            logger.warning(
                "payment.admission.recovered_after_write_failure",
                reference_id=request.reference_id,
                payment_id=recovered.id,
            )
            return AdmissionResult(payment=recovered, created=False)

        logger.info(
            "payment.admission.created",
            reference_id=stored.reference_id,
            payment_id=stored.id,
            status=stored.status.value,
        )
        return AdmissionResult(payment=stored, created=True)

    async def find_by_reference(self, reference_id: str) -> Payment | None:
        return await self._repository.find_by_reference(reference_id)

    def _build_payment(self, request: PaymentCreate) -> Payment:
        outcome = self._evaluator.evaluate(request.amount, request.currency, request.reference_id)
        return Payment(
            id=str(uuid.uuid4()),
            reference_id=request.reference_id,
            amount=request.amount.quantize(AMOUNT_QUANTUM),
            currency=request.currency.upper(),
            status=outcome.status,
            failure_reason=outcome.failure_reason,
            created_at=utcnow(),
            updated_at=None,
        )

    async def _reread_winner(self, reference_id: str) -> Payment:
        for attempt in range(1, self._reread_attempts + 1):
            winner = await self._repository.find_by_reference(reference_id)
            if winner is not None:
                return winner
            logger.warning("payment.admission.reread_miss", reference_id=reference_id, attempt=attempt)
            if attempt < self._reread_attempts:
                await asyncio.sleep(self._reread_delay_seconds * attempt)
        raise ReferenceNotVisibleError(reference_id, self._reread_attempts)
