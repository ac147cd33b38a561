from payments_service.services import outcome_evaluator, payment_repository, payment_service

__all__ = [
    "outcome_evaluator",
    "payment_repository",
    "payment_service",
]
