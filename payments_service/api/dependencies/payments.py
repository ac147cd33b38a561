from fastapi import Depends, Request

from payments_service.api.dependencies.settings import get_app_settings
from payments_service.core.config import Settings
from payments_service.services.outcome_evaluator import OutcomeEvaluator
from payments_service.services.payment_repository import SqlAlchemyPaymentRepository
from payments_service.services.payment_service import PaymentService


def get_payment_service(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> PaymentService:
    repository = SqlAlchemyPaymentRepository(request.app.state.session_factory)
    return PaymentService(
        repository,
        OutcomeEvaluator.from_settings(settings),
        reread_attempts=settings.admission_reread_attempts,
        reread_delay_seconds=settings.admission_reread_delay_seconds,
    )
