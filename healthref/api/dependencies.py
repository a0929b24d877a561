from __future__ import annotations

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from healthref.db.session import async_session


async def get_db() -> AsyncIterator[AsyncSession]:
    """One session per request; nothing is written, so nothing is committed."""
    async with async_session() as session:
        yield session
