import uvicorn

from payments_service.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "payments_service.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
