from urllib.parse import quote

from fastapi import APIRouter, Depends, Response, status

from payments_service.api.dependencies.auth import get_current_client
from payments_service.api.dependencies.payments import get_payment_service
from payments_service.api.errors import ApiError
from payments_service.core.logging import get_logger
from payments_service.schemas.error import ErrorResponse
from payments_service.schemas.payment import PaymentCreate, PaymentRead
from payments_service.services.payment_service import PaymentService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/payments",
    tags=["payments"],
    responses={401: {"model": ErrorResponse}},
)


@router.post(
    "",
    response_model=PaymentRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": PaymentRead, "description": "Reference already admitted; stored result returned"},
        400: {"model": ErrorResponse},
    },
)
async def create_payment_endpoint(
    payload: PaymentCreate,
    response: Response,
    service: PaymentService = Depends(get_payment_service),
    client_id: str = Depends(get_current_client),
) -> PaymentRead:
    result = await service.admit(payload)
    if result.replayed:
        logger.info("payment.request.replayed", reference_id=payload.reference_id, client_id=client_id)
        response.status_code = status.HTTP_200_OK
    else:
        response.headers["Location"] = f"{router.prefix}/{quote(result.payment.reference_id, safe='')}"
    return PaymentRead.model_validate(result.payment)


@router.get(
    "/{reference_id:path}",
    response_model=PaymentRead,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_payment_endpoint(
    reference_id: str,
    service: PaymentService = Depends(get_payment_service),
    client_id: str = Depends(get_current_client),  # noqa: ARG001
) -> PaymentRead:
    if not reference_id.strip():
        raise ApiError(status.HTTP_400_BAD_REQUEST, "INVALID_ARGUMENT", "referenceId must not be empty.")
    payment = await service.find_by_reference(reference_id)
    if payment is None:
        raise ApiError(
            status.HTTP_404_NOT_FOUND,
            "PAYMENT_NOT_FOUND",
            f"No payment found with ReferenceId '{reference_id}'.",
        )
    return PaymentRead.model_validate(payment)
