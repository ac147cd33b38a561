from payments_service.models.payment import Payment, PaymentStatus

__all__ = [
    "Payment",
    "PaymentStatus",
]
