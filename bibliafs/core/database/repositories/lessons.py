"""
Teacher lesson repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.lessons import Lesson, LessonProgress
from .base import SQLModelRepository, UserOwnedRepository


class LessonRepository(UserOwnedRepository[Lesson]):
    """Lessons are owned through ``teacher_id``."""

    owner_field = "teacher_id"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Lesson)

    async def delete_owned(self, entity_id: int, user_id: str) -> bool:
        if await self.get_owned(entity_id, user_id) is None:
            return False
        await self.session.execute(sa_delete(LessonProgress).where(LessonProgress.lesson_id == entity_id))
        return await super().delete_owned(entity_id, user_id)


class LessonProgressRepository(SQLModelRepository[LessonProgress]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, LessonProgress)

    async def get_for(self, lesson_id: int, student_id: str) -> Optional[LessonProgress]:
        stmt = select(LessonProgress).where(
            LessonProgress.lesson_id == lesson_id, LessonProgress.student_id == student_id
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_for_lesson(self, lesson_id: int) -> List[LessonProgress]:
        result = await self.session.execute(self._ordered(select(LessonProgress).where(LessonProgress.lesson_id == lesson_id)))
        return list(result.scalars().all())

    async def upsert(self, progress: LessonProgress) -> LessonProgress:
        existing = await self.get_for(progress.lesson_id, progress.student_id)
        if existing is None:
            return await self.create(progress)
        existing.is_completed = progress.is_completed
        existing.score = progress.score
        existing.answers = progress.answers
        existing.completed_at = progress.completed_at
        return await self.update(existing)
