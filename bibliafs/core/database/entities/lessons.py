"""
Teacher lesson entity models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import JSON, Field

from ..base import Base, utc_now


class Lesson(Base, table=True):
    """Lesson authored by a teacher.

    ``questions`` holds ``{"id", "question", "options", "correct_answer"}`` items.

    Table: lessons
    """

    __tablename__ = "lessons"

    id: Optional[int] = Field(default=None, primary_key=True)
    teacher_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None)
    scripture_references: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    objectives: List[str] = Field(default_factory=list, sa_type=JSON)
    content_blocks: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    questions: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    scheduled_for: Optional[datetime] = Field(default=None)
    is_published: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class LessonProgress(Base, table=True):
    """A student's answers and score for a lesson.

    Table: lesson_progress
    """

    __tablename__ = "lesson_progress"
    __table_args__ = (UniqueConstraint("lesson_id", "student_id", name="uq_lesson_progress_lesson_student"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    lesson_id: int = Field(foreign_key="lessons.id", index=True, ondelete="CASCADE")
    student_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    is_completed: bool = Field(default=False)
    score: Optional[int] = Field(default=None, description="Percentage of correct answers")
    answers: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    completed_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
