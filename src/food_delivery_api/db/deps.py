from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Сессия из Database, созданной в lifespan и сохранённой в app.state.db.
    Закрывается после ответа.
    """
    async with request.app.state.db.session_factory() as session:
        yield session
