from __future__ import annotations

import hmac
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt

from payments_service.core.config import Settings

ALGORITHM = "HS256"


def verify_client_credentials(settings: Settings, client_id: str, client_secret: str) -> bool:
    if not settings.auth_configured:
        return False
    id_matches = hmac.compare_digest(client_id.encode(), settings.auth_client_id.encode())  # type: ignore[union-attr]
    secret_matches = hmac.compare_digest(client_secret.encode(), settings.auth_client_secret.encode())  # type: ignore[union-attr]
    return id_matches and secret_matches


def create_access_token(settings: Settings, subject: str) -> str:
    now = datetime.now(timezone.utc)
    claims: dict[str, Any] = {
        "sub": subject,
        "jti": str(uuid.uuid4()),
        "iat": int(now.timestamp()),
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """Validate signature, lifetime, issuer and audience; raises ``JWTError`` on failure."""
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[ALGORITHM],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )
