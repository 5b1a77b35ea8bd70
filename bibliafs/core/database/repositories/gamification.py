"""
Achievement repositories.
"""

from __future__ import annotations

from typing import List, Optional, Set, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.gamification import Achievement, UserAchievement
from .base import SQLModelRepository, UserOwnedRepository


class AchievementRepository(SQLModelRepository[Achievement]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Achievement)

    def _ordered(self, stmt):
        return stmt.order_by(Achievement.id)


class UserAchievementRepository(UserOwnedRepository[UserAchievement]):
    """Repository for per-user achievement progress."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserAchievement)

    async def get_for(self, user_id: str, achievement_id: int) -> Optional[UserAchievement]:
        stmt = select(UserAchievement).where(
            UserAchievement.user_id == user_id, UserAchievement.achievement_id == achievement_id
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def unlocked_ids(self, user_id: str) -> Set[int]:
        stmt = select(UserAchievement.achievement_id).where(
            UserAchievement.user_id == user_id, UserAchievement.is_unlocked == True  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def list_with_achievements(self, user_id: str) -> List[Tuple[UserAchievement, Achievement]]:
        stmt = (
            select(UserAchievement, Achievement)
            .join(Achievement, Achievement.id == UserAchievement.achievement_id)
            .where(UserAchievement.user_id == user_id)
            .order_by(UserAchievement.unlocked_at.desc(), UserAchievement.id.desc())  # type: ignore[union-attr]
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]
