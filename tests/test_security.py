from datetime import datetime, timezone

import pytest
from jose import JWTError

from payments_service.core.config import Settings
from payments_service.core.security import (
    create_access_token,
    decode_access_token,
    verify_client_credentials,
)


@pytest.fixture
def settings():
    return Settings(
        secret_key="unit-test-signing-key",
        auth_client_id="client-a",
        auth_client_secret="s3cret-value",
        access_token_expire_minutes=15,
    )


def test_token_claims(settings):
    claims = decode_access_token(settings, create_access_token(settings, "client-a"))

    assert claims["sub"] == "client-a"
    assert claims["iss"] == settings.jwt_issuer
    assert claims["aud"] == settings.jwt_audience
    assert claims["jti"]
    lifetime = claims["exp"] - claims["iat"]
    assert 14 * 60 <= lifetime <= 15 * 60
    assert claims["exp"] > datetime.now(timezone.utc).timestamp()


def test_tokens_are_unique(settings):
    assert create_access_token(settings, "client-a") != create_access_token(settings, "client-a")


def test_wrong_audience_rejected(settings):
    token = create_access_token(settings, "client-a")
    other = settings.model_copy(update={"jwt_audience": "someone-else"})
    with pytest.raises(JWTError):
        decode_access_token(other, token)


def test_client_credentials(settings):
    assert verify_client_credentials(settings, "client-a", "s3cret-value")
    assert not verify_client_credentials(settings, "client-a", "wrong")
    assert not verify_client_credentials(settings, "client-b", "s3cret-value")


def test_client_credentials_without_configuration():
    assert not verify_client_credentials(Settings(), "", "")
