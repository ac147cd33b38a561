from fastapi import Request

from payments_service.core.config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
