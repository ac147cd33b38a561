from payments_service.schemas.auth import TokenRequest, TokenResponse
from payments_service.schemas.error import ErrorResponse
from payments_service.schemas.payment import PaymentCreate, PaymentRead

__all__ = [
    "ErrorResponse",
    "PaymentCreate",
    "PaymentRead",
    "TokenRequest",
    "TokenResponse",
]
