from fastapi import APIRouter, Depends, status

from payments_service.api.dependencies.settings import get_app_settings
from payments_service.api.errors import ApiError
from payments_service.core.config import Settings
from payments_service.core.logging import get_logger
from payments_service.core.security import create_access_token, verify_client_credentials
from payments_service.schemas.auth import TokenRequest, TokenResponse, get_token_expiry_seconds
from payments_service.schemas.error import ErrorResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/token",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def issue_token(
    payload: TokenRequest,
    settings: Settings = Depends(get_app_settings),
) -> TokenResponse:
    if not settings.auth_configured:
        logger.error("auth.credentials.not_configured")
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "CONFIG_ERROR",
            "Authentication is not configured.",
        )
    if not verify_client_credentials(settings, payload.client_id, payload.client_secret):
        logger.warning("auth.token.rejected", client_id=payload.client_id)
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED,
            "INVALID_CREDENTIALS",
            "The client credentials are invalid.",
        )
    logger.info("auth.token.issued", client_id=payload.client_id)
    return TokenResponse(
        access_token=create_access_token(settings, payload.client_id),
        expires_in=get_token_expiry_seconds(settings.access_token_expire_minutes),
    )
