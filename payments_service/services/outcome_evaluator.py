from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from payments_service.core.config import Settings
from payments_service.models.payment import PaymentStatus

DEFAULT_REJECTED_CURRENCIES = frozenset({"XTS"})
DEFAULT_LARGE_AMOUNT_THRESHOLD = Decimal("50000")


@dataclass(frozen=True)
class Outcome:
    status: PaymentStatus
    failure_reason: str | None = None


@dataclass(frozen=True)
class OutcomeEvaluator:
    """
    Classifies a payment request without touching storage.

    Rules, first match wins:
      1. currency in ``rejected_currencies`` (case-insensitive) -> Rejected
      2. amount above ``large_amount_threshold`` -> Processing
      3. anything else -> Completed

    Inputs are expected to be shape-validated already.
    """

    rejected_currencies: frozenset[str] = field(default=DEFAULT_REJECTED_CURRENCIES)
    large_amount_threshold: Decimal = field(default=DEFAULT_LARGE_AMOUNT_THRESHOLD)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rejected_currencies", _normalize(self.rejected_currencies))

    @classmethod
    def from_settings(cls, settings: Settings) -> "OutcomeEvaluator":
        return cls(
            rejected_currencies=settings.rejected_currencies,
            large_amount_threshold=settings.large_amount_threshold,
        )

    def evaluate(self, amount: Decimal, currency: str, reference_id: str | None = None) -> Outcome:  # noqa: ARG002
        if currency.upper() in self.rejected_currencies:
            return Outcome(
                status=PaymentStatus.REJECTED,
                failure_reason=f"Currency '{currency}' is not accepted.",
            )
        if amount > self.large_amount_threshold:
            return Outcome(status=PaymentStatus.PROCESSING)
        return Outcome(status=PaymentStatus.COMPLETED)


def _normalize(currencies: Iterable[str]) -> frozenset[str]:
    return frozenset(code.strip().upper() for code in currencies)
