from datetime import datetime
from decimal import Decimal

from pydantic import Field

from payments_service.models.payment import AMOUNT_SCALE, REFERENCE_ID_MAX_LENGTH, PaymentStatus
from payments_service.schemas.common import ORMModel


class PaymentCreate(ORMModel):
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=AMOUNT_SCALE)
    currency: str = Field(pattern=r"^[A-Z]{3}$", description="ISO 4217 code, e.g. USD")
    reference_id: str = Field(min_length=1, max_length=REFERENCE_ID_MAX_LENGTH)


class PaymentRead(ORMModel):
    id: str
    reference_id: str
    amount: Decimal
    currency: str
    status: PaymentStatus
    failure_reason: str | None
    created_at: datetime
    updated_at: datetime | None
