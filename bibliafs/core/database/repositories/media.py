"""
Audio progress and offline content repositories.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.media import AudioProgress, OfflineContent
from .base import UserOwnedRepository


class AudioProgressRepository(UserOwnedRepository[AudioProgress]):
    order_by = "last_played_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AudioProgress)

    async def get_for_chapter(self, user_id: str, book: str, chapter: int, version: str) -> Optional[AudioProgress]:
        stmt = select(AudioProgress).where(
            AudioProgress.user_id == user_id,
            AudioProgress.book == book,
            AudioProgress.chapter == chapter,
            AudioProgress.version == version,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def upsert(self, user_id: str, book: str, chapter: int, version: str, values: Dict[str, Any]) -> AudioProgress:
        row = await self.get_for_chapter(user_id, book, chapter, version)
        if row is None:
            row = AudioProgress(user_id=user_id, book=book, chapter=chapter, version=version)
        for key, value in values.items():
            setattr(row, key, value)
        row.last_played_at = utc_now()
        return await self.create(row)


class OfflineContentRepository(UserOwnedRepository[OfflineContent]):
    order_by = "downloaded_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, OfflineContent)

    async def upsert(
        self, user_id: str, book: str, chapter: int, version: str, content: Dict[str, Any], size_bytes: int
    ) -> OfflineContent:
        stmt = select(OfflineContent).where(
            OfflineContent.user_id == user_id,
            OfflineContent.book == book,
            OfflineContent.chapter == chapter,
            OfflineContent.version == version,
        )
        row = (await self.session.execute(stmt)).scalars().first()
        if row is None:
            row = OfflineContent(user_id=user_id, book=book, chapter=chapter, version=version)
        row.content = content
        row.size_bytes = size_bytes
        row.downloaded_at = utc_now()
        return await self.create(row)

    async def delete_all_for_user(self, user_id: str) -> int:
        result = await self.session.execute(sa_delete(OfflineContent).where(OfflineContent.user_id == user_id))
        await self.session.commit()
        return result.rowcount or 0
