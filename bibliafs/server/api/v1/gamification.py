"""
Gamification Endpoints.

Reading rewards, the achievement catalogue and the user's level summary.
"""

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from bibliafs.core.database.entities.gamification import Achievement, UserAchievement
from bibliafs.core.models.io.bible import MarkReadRequest
from bibliafs.gamification import (
    RewardResult,
    UserNotFoundError,
    ensure_achievements,
    level_info,
    progress_to_next_level,
)
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import GamificationDep, RepoBundleDep

router = APIRouter(tags=["gamification"])


class MyAchievement(BaseModel):
    progress: int
    is_unlocked: bool
    unlocked_at: Optional[datetime] = None
    achievement: Achievement


class GamificationStats(BaseModel):
    level: int
    level_title: str
    experience_points: int
    reading_streak: int
    achievements_unlocked: int
    last_read_date: Optional[date]
    next_level_xp: Optional[int]
    progress_percent: float


@router.post(
    "/bible/mark-read",
    response_model=RewardResult,
    summary="Mark Chapter Read",
    description="Record today's reading. Grants XP, updates the streak and unlocks achievements once per UTC day.",
    responses={400: {"description": "Book or chapter missing"}, 404: {"description": "User not found"}},
)
async def mark_read(body: MarkReadRequest, user: CurrentUser, gamification: GamificationDep) -> RewardResult:
    if not body.book or not body.chapter:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Book and chapter are required")
    try:
        return await gamification.award_reading(user.id)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get(
    "/achievements",
    response_model=List[Achievement],
    summary="Achievement Catalogue",
    description="All achievements. The built-in set is seeded on first access.",
)
async def list_achievements(user: CurrentUser, repos: RepoBundleDep) -> List[Achievement]:
    return await ensure_achievements(repos.achievements)


@router.get("/my-achievements", response_model=List[MyAchievement], summary="My Achievements")
async def my_achievements(user: CurrentUser, repos: RepoBundleDep) -> List[MyAchievement]:
    rows = await repos.user_achievements.list_with_achievements(user.id)
    return [_my_achievement(progress, achievement) for progress, achievement in rows]


def _my_achievement(progress: UserAchievement, achievement: Achievement) -> MyAchievement:
    return MyAchievement(
        progress=progress.progress,
        is_unlocked=progress.is_unlocked,
        unlocked_at=progress.unlocked_at,
        achievement=achievement,
    )


@router.get("/stats/gamification", response_model=GamificationStats, summary="Level and Streak Summary")
async def gamification_stats(user: CurrentUser, repos: RepoBundleDep) -> GamificationStats:
    progress = progress_to_next_level(user.experience_points)
    unlocked = await repos.user_achievements.unlocked_ids(user.id)
    return GamificationStats(
        level=user.level,
        level_title=level_info(user.level).title,
        experience_points=user.experience_points,
        reading_streak=user.reading_streak,
        achievements_unlocked=len(unlocked),
        last_read_date=user.last_read_date,
        next_level_xp=progress.next_level_xp,
        progress_percent=progress.progress_percent,
    )
