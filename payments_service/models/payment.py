from __future__ import annotations

import uuid
from decimal import Decimal
from enum import Enum
from typing import Annotated

from sqlalchemy import Enum as SAEnum, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from payments_service.db.base import Base
from payments_service.models.mixins import TimestampMixin

Identifier = Annotated[str, mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))]

REFERENCE_ID_MAX_LENGTH = 128
AMOUNT_SCALE = 4


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    REJECTED = "Rejected"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PaymentStatus.COMPLETED, PaymentStatus.REJECTED, PaymentStatus.FAILED)


class Payment(TimestampMixin, Base):
    __tablename__ = "payments"
    __table_args__ = (UniqueConstraint("reference_id", name="uq_payments_reference_id"),)

    id: Mapped[Identifier]
    reference_id: Mapped[str] = mapped_column(String(REFERENCE_ID_MAX_LENGTH), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=AMOUNT_SCALE), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(
            PaymentStatus,
            native_enum=False,
            length=16,
            values_callable=lambda statuses: [status.value for status in statuses],
            validate_strings=True,
        ),
        nullable=False,
    )
    failure_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Payment id={self.id} reference_id={self.reference_id!r} status={self.status.value}>"
