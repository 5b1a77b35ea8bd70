"""
Gamification entity models.

Achievements are global definitions with a JSON requirement
(``{"type": "streak_days", "value": 7}``); ``UserAchievement`` rows track each
user's progress and unlock state.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import JSON, Field

from ..base import Base, utc_now


class Achievement(Base, table=True):
    """Achievement definition.

    Table: achievements
    """

    __tablename__ = "achievements"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=120, unique=True)
    description: str = Field(default="")
    icon: str = Field(default="trophy", max_length=64)
    category: str = Field(max_length=32, description="reading, streak, social or special")
    requirement: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    xp_reward: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def requirement_type(self) -> Optional[str]:
        return (self.requirement or {}).get("type")

    @property
    def requirement_value(self) -> int:
        return int((self.requirement or {}).get("value") or 0)

    def __repr__(self) -> str:
        return f"Achievement(id={self.id}, name={self.name}, category={self.category})"


class UserAchievement(Base, table=True):
    """Per-user achievement progress.

    Table: user_achievements
    """

    __tablename__ = "user_achievements"
    __table_args__ = (UniqueConstraint("user_id", "achievement_id", name="uq_user_achievements_user_achievement"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    achievement_id: int = Field(foreign_key="achievements.id", ondelete="CASCADE")
    progress: int = Field(default=0)
    is_unlocked: bool = Field(default=False)
    unlocked_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
