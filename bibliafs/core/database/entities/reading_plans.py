"""
Reading plan entity models.

Templates hold a reusable day-by-day schedule; user plans hold a private copy
of a schedule where every day carries its own ``is_completed`` flag.

Schedule JSON shape::

    [{"day": 1, "readings": [{"book": "Salmos", "chapter": 23, "verses": ""}], "is_completed": false}, ...]
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now


class ReadingPlanTemplate(Base, table=True):
    """Built-in reading plan template.

    Table: reading_plan_templates
    """

    __tablename__ = "reading_plan_templates"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=200)
    description: Optional[str] = Field(default=None)
    duration: int = Field(description="Number of days in the plan")
    category: Optional[str] = Field(default=None, max_length=64)
    difficulty: Optional[str] = Field(default=None, max_length=32)
    schedule: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"ReadingPlanTemplate(id={self.id}, name={self.name}, duration={self.duration})"


class ReadingPlan(Base, table=True):
    """A user's reading plan with per-day completion tracking.

    Table: reading_plans
    """

    __tablename__ = "reading_plans"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    template_id: Optional[int] = Field(default=None, foreign_key="reading_plan_templates.id")

    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None)
    plan_type: str = Field(default="manual", max_length=16)
    schedule: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    current_day: int = Field(default=1)
    total_days: int = Field(default=30)
    is_completed: bool = Field(default=False)

    started_at: datetime = Field(default_factory=utc_now)
    completed_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"ReadingPlan(id={self.id}, user_id={self.user_id}, day={self.current_day}/{self.total_days})"
