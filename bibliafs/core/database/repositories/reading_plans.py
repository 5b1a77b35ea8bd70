"""
Reading plan repositories.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.reading_plans import ReadingPlan, ReadingPlanTemplate
from .base import SQLModelRepository, UserOwnedRepository


class ReadingPlanTemplateRepository(SQLModelRepository[ReadingPlanTemplate]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ReadingPlanTemplate)

    def _ordered(self, stmt):
        return stmt.order_by(ReadingPlanTemplate.id)


class ReadingPlanRepository(UserOwnedRepository[ReadingPlan]):
    """Repository for user reading plans."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ReadingPlan)

    async def get_current(self, user_id: str) -> Optional[ReadingPlan]:
        """Newest plan that is not completed yet."""
        stmt = self._ordered(
            select(ReadingPlan).where(ReadingPlan.user_id == user_id, ReadingPlan.is_completed == False)  # noqa: E712
        )
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first()

    async def get_latest_updated(self, user_id: str) -> Optional[ReadingPlan]:
        stmt = (
            select(ReadingPlan)
            .where(ReadingPlan.user_id == user_id)
            .order_by(ReadingPlan.updated_at.desc(), ReadingPlan.id.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
