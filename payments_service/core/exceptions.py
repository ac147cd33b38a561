from __future__ import annotations


class PaymentsServiceError(Exception):
    """Base class for errors raised by the payments core."""


class PaymentStorageError(PaymentsServiceError):
    """The payment store could not complete a read or write."""


class DuplicateReferenceError(PaymentStorageError):
    """An insert collided with an existing row on ``reference_id``."""

    def __init__(self, reference_id: str) -> None:
        super().__init__(f"A payment with reference '{reference_id}' already exists.")
        self.reference_id = reference_id


class ReferenceNotVisibleError(PaymentStorageError):
    """A concurrent admission won the insert but its row never became readable."""

    def __init__(self, reference_id: str, attempts: int) -> None:
        super().__init__(
            f"Payment with reference '{reference_id}' was not visible after {attempts} re-reads."
        )
        self.reference_id = reference_id
        self.attempts = attempts
