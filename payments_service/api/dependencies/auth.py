from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError

from payments_service.api.dependencies.settings import get_app_settings
from payments_service.api.errors import ApiError
from payments_service.core.config import Settings
from payments_service.core.logging import get_logger
from payments_service.core.security import decode_access_token

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(message: str, *, expired: bool = False) -> ApiError:
    headers = {"WWW-Authenticate": "Bearer"}
    if expired:
        headers["X-Token-Expired"] = "true"
    return ApiError(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", message, headers=headers)


async def get_current_client(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Missing bearer token.")
    try:
        payload = decode_access_token(settings, credentials.credentials)
    except ExpiredSignatureError as exc:
        raise _unauthorized("The access token has expired.", expired=True) from exc
    except JWTError as exc:
        logger.info("auth.token.invalid", error=str(exc))
        raise _unauthorized("Could not validate credentials.") from exc

    subject: str | None = payload.get("sub")
    if not subject:
        raise _unauthorized("Could not validate credentials.")
    return subject
