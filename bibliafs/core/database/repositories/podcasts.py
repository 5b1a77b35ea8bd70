"""
Podcast repositories.

``subscriber_count`` is maintained here alongside the subscription rows so the
counter changes exactly once per subscribe and never drops below zero.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.podcasts import Podcast, PodcastSubscription
from .base import SQLModelRepository, UserOwnedRepository


class PodcastRepository(SQLModelRepository[Podcast]):
    """Repository for podcast data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Podcast)

    async def list_active(self) -> List[Podcast]:
        stmt = (
            select(Podcast)
            .where(Podcast.is_active == True)  # noqa: E712
            .order_by(Podcast.subscriber_count.desc(), Podcast.id.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_creator(self, user_id: str) -> List[Podcast]:
        stmt = self._ordered(select(Podcast).where(Podcast.created_by == user_id))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_rss_url(self, rss_url: str) -> Optional[Podcast]:
        result = await self.session.execute(select(Podcast).where(Podcast.rss_url == rss_url))
        return result.scalars().first()

    async def delete(self, entity_id: str | int) -> bool:
        await self.session.execute(sa_delete(PodcastSubscription).where(PodcastSubscription.podcast_id == entity_id))
        return await super().delete(entity_id)


class PodcastSubscriptionRepository(UserOwnedRepository[PodcastSubscription]):
    """Repository for podcast subscriptions."""

    order_by = "subscribed_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PodcastSubscription)

    async def get_for(self, user_id: str, podcast_id: int) -> Optional[PodcastSubscription]:
        stmt = select(PodcastSubscription).where(
            PodcastSubscription.user_id == user_id, PodcastSubscription.podcast_id == podcast_id
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_with_podcasts(self, user_id: str) -> List[Tuple[PodcastSubscription, Podcast]]:
        stmt = (
            select(PodcastSubscription, Podcast)
            .join(Podcast, Podcast.id == PodcastSubscription.podcast_id)
            .where(PodcastSubscription.user_id == user_id)
            .order_by(PodcastSubscription.subscribed_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def subscribe(self, user_id: str, podcast: Podcast) -> PodcastSubscription:
        """Subscribe once; repeated calls return the existing row unchanged."""
        existing = await self.get_for(user_id, podcast.id)  # type: ignore[arg-type]
        if existing is not None:
            return existing
        subscription = PodcastSubscription(user_id=user_id, podcast_id=podcast.id)  # type: ignore[arg-type]
        podcast.subscriber_count = (podcast.subscriber_count or 0) + 1
        self.session.add(podcast)
        return await self.create(subscription)

    async def unsubscribe(self, user_id: str, podcast_id: int) -> bool:
        existing = await self.get_for(user_id, podcast_id)
        if existing is None:
            return False
        podcast = await self.session.get(Podcast, podcast_id)
        if podcast is not None:
            podcast.subscriber_count = max(0, (podcast.subscriber_count or 0) - 1)
            self.session.add(podcast)
        await self.session.delete(existing)
        await self.session.commit()
        return True
