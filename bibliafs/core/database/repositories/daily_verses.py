"""
Daily verse repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.daily_verses import DailyVerse
from .base import SQLModelRepository


class DailyVerseRepository(SQLModelRepository[DailyVerse]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, DailyVerse)

    def _ordered(self, stmt):
        return stmt.order_by(DailyVerse.day_of_year)

    async def get_by_day(self, day_of_year: int) -> Optional[DailyVerse]:
        result = await self.session.execute(select(DailyVerse).where(DailyVerse.day_of_year == day_of_year))
        return result.scalars().first()
