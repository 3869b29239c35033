import logging

from sqlalchemy import pool, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from food_delivery_api import models  # noqa: F401  регистрирует таблицы в Base.metadata
from food_delivery_api.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Асинхронный движок и фабрика сессий.

    Создаётся один раз при старте приложения (см. main.lifespan) и
    закрывается при остановке. Тесты создают свой экземпляр.
    """

    def __init__(self, url: str, echo: bool = False):
        kwargs = {}
        if url.startswith("sqlite") and (":memory:" in url or url.endswith("://")):
            # одна общая in-memory база на все соединения
            kwargs["poolclass"] = pool.StaticPool
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True, **kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def ping(self) -> bool:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()

