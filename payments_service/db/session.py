from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from payments_service import models  # noqa: F401
from payments_service.core.config import Settings
from payments_service.core.logging import get_logger
from payments_service.db.base import Base

logger = get_logger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(settings.database_url, echo=settings.database_echo, pool_pre_ping=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_models(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    await init_models(engine)
    logger.info("application.startup", environment=settings.environment)
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("application.shutdown")
