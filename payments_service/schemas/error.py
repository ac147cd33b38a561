from pydantic import BaseModel


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: list[str] | None = None
