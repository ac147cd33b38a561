from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payments_service.api.errors import register_exception_handlers
from payments_service.api.routes import auth, health, payments
from payments_service.core.config import Settings, get_settings
from payments_service.core.logging import configure_logging
from payments_service.db.session import lifespan
from payments_service.middleware.security import RequestLoggingMiddleware, SecurityHeadersMiddleware


def create_application(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title=settings.app_name, lifespan=lifespan)
    application.state.settings = settings

    application.include_router(health.router)
    application.include_router(auth.router)
    application.include_router(payments.router)

    register_exception_handlers(application)

    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    if settings.allowed_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.allowed_origins],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    return application


app = create_application()
