"""
Personal study repositories: prayers, notes, highlights, bookmarks and reader settings.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.study import BibleSettings, Bookmark, Highlight, Note, Prayer
from .base import SQLModelRepository, UserOwnedRepository


class PrayerRepository(UserOwnedRepository[Prayer]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Prayer)


class NoteRepository(UserOwnedRepository[Note]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Note)


class HighlightRepository(UserOwnedRepository[Highlight]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Highlight)


class BookmarkRepository(UserOwnedRepository[Bookmark]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Bookmark)


class BibleSettingsRepository(SQLModelRepository[BibleSettings]):
    """One settings row per user."""

    order_by = "updated_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BibleSettings)

    async def get_for_user(self, user_id: str) -> Optional[BibleSettings]:
        result = await self.session.execute(select(BibleSettings).where(BibleSettings.user_id == user_id))
        return result.scalars().first()

    async def upsert(self, user_id: str, values: Dict[str, Any]) -> BibleSettings:
        settings_row = await self.get_for_user(user_id)
        if settings_row is None:
            return await self.create(BibleSettings(user_id=user_id, **values))
        for key, value in values.items():
            setattr(settings_row, key, value)
        return await self.update(settings_row)
