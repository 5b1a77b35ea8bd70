"""
Push notification repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.notifications import NotificationHistory, NotificationPreference, PushSubscription
from .base import SQLModelRepository, UserOwnedRepository


class PushSubscriptionRepository(UserOwnedRepository[PushSubscription]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PushSubscription)

    async def get_by_endpoint(self, endpoint: str) -> Optional[PushSubscription]:
        result = await self.session.execute(select(PushSubscription).where(PushSubscription.endpoint == endpoint))
        return result.scalars().first()

    async def list_active_for_user(self, user_id: str) -> List[PushSubscription]:
        stmt = select(PushSubscription).where(
            PushSubscription.user_id == user_id, PushSubscription.is_active == True  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def deactivate(self, subscription: PushSubscription) -> PushSubscription:
        subscription.is_active = False
        return await self.update(subscription)


class NotificationPreferenceRepository(SQLModelRepository[NotificationPreference]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, NotificationPreference)

    async def get_for_user(self, user_id: str) -> Optional[NotificationPreference]:
        stmt = select(NotificationPreference).where(NotificationPreference.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_all(self) -> List[NotificationPreference]:
        result = await self.session.execute(select(NotificationPreference).order_by(NotificationPreference.id))
        return list(result.scalars().all())


class NotificationHistoryRepository(UserOwnedRepository[NotificationHistory]):
    order_by = "sent_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, NotificationHistory)

    async def mark_clicked(self, notification_id: int) -> Optional[NotificationHistory]:
        entry = await self.get_by_id(notification_id)
        if entry is None:
            return None
        entry.clicked = True
        entry.clicked_at = utc_now()
        return await self.update(entry)
