from datetime import timedelta

from pydantic import Field

from payments_service.schemas.common import ORMModel


class TokenRequest(ORMModel):
    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)


class TokenResponse(ORMModel):
    access_token: str
    token_type: str = Field(default="Bearer")
    expires_in: int


def get_token_expiry_seconds(minutes: int) -> int:
    return int(timedelta(minutes=minutes).total_seconds())
