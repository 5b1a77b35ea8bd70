"""
Gamification reward transaction.

``GamificationService.award_reading`` applies the XP, streak, level and
achievement changes of a recorded reading in one database transaction: the
user row is locked, every change is staged on the session, and a single commit
publishes them. Any failure rolls the whole reward back.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field
from sqlmodel import select

from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.gamification import Achievement, UserAchievement
from bibliafs.core.database.entities.users import User
from bibliafs.core.database.repositories.bundle import RepoBundle

from .levels import level_for_xp
from .seeds import ensure_achievements
from .streaks import next_streak

logger = logging.getLogger(__name__)

ALREADY_READ_TODAY = "Você já marcou uma leitura hoje!"


class UserNotFoundError(LookupError):
    """Raised when the rewarded user does not exist."""


class UnlockedAchievement(BaseModel):
    id: int
    name: str
    description: str
    icon: str
    category: str
    xp_reward: int


class RewardResult(BaseModel):
    xp_gained: int
    new_xp: int
    new_streak: int
    new_level: int
    unlocked_achievements: List[UnlockedAchievement] = Field(default_factory=list)
    message: Optional[str] = None


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def qualifies(achievement: Achievement, streak: int) -> bool:
    """Whether a reading with the resulting ``streak`` unlocks ``achievement``."""
    requirement_type = achievement.requirement_type
    if achievement.category == "reading" and requirement_type == "chapters_read":
        return achievement.requirement_value == 1
    if achievement.category == "streak" and requirement_type == "streak_days":
        return streak >= achievement.requirement_value
    return False


class GamificationService:
    """Awards XP, streaks and achievements for readings."""

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos
        self.session = repos.session

    async def award_reading(self, user_id: str, base_xp: int = 10, today: Optional[date] = None) -> RewardResult:
        """Record a reading for ``user_id`` and grant its rewards.

        A second reading on the same UTC day grants nothing and changes nothing.

        Args:
            user_id: The reading user
            base_xp: XP granted for the reading itself
            today: Calendar date of the reading (UTC today by default)

        Returns:
            The reward summary

        Raises:
            UserNotFoundError: If the user does not exist
        """
        today = today or utc_today()
        await ensure_achievements(self.repos.achievements)
        try:
            stmt = (
                select(User)
                .where(User.id == user_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            user = (await self.session.execute(stmt)).scalars().first()
            if user is None:
                raise UserNotFoundError(user_id)

            if user.last_read_date == today:
                await self.session.commit()
                return RewardResult(
                    xp_gained=0,
                    new_xp=user.experience_points,
                    new_streak=user.reading_streak,
                    new_level=user.level,
                    message=ALREADY_READ_TODAY,
                )

            streak = next_streak(user.last_read_date, today, user.reading_streak)
            user.experience_points += base_xp
            user.reading_streak = streak
            user.last_read_date = today

            unlocked = await self._unlock_achievements(user, streak)

            user.level = level_for_xp(user.experience_points)
            user.updated_at = utc_now()
            self.session.add(user)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            f"Reading rewarded for user {user_id}: +{base_xp} XP, streak {streak}, {len(unlocked)} unlocked",
            extra={"user_id": user_id, "streak": streak, "level": user.level},
        )
        return RewardResult(
            xp_gained=base_xp,
            new_xp=user.experience_points,
            new_streak=streak,
            new_level=user.level,
            unlocked_achievements=unlocked,
        )

    async def _unlock_achievements(self, user: User, streak: int) -> List[UnlockedAchievement]:
        already = await self.repos.user_achievements.unlocked_ids(user.id)
        unlocked: List[UnlockedAchievement] = []
        now = utc_now()
        for achievement in await self.repos.achievements.list():
            if achievement.id in already or not qualifies(achievement, streak):
                continue
            row = await self.repos.user_achievements.get_for(user.id, achievement.id)  # type: ignore[arg-type]
            if row is None:
                row = UserAchievement(user_id=user.id, achievement_id=achievement.id)  # type: ignore[arg-type]
            row.is_unlocked = True
            row.unlocked_at = now
            row.progress = achievement.requirement_value
            self.session.add(row)
            user.experience_points += achievement.xp_reward
            unlocked.append(
                UnlockedAchievement(
                    id=achievement.id,  # type: ignore[arg-type]
                    name=achievement.name,
                    description=achievement.description,
                    icon=achievement.icon,
                    category=achievement.category,
                    xp_reward=achievement.xp_reward,
                )
            )
        return unlocked
