"""
Donation repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.donations import Donation, DonationStatus
from .base import UserOwnedRepository


class DonationRepository(UserOwnedRepository[Donation]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Donation)

    async def get_by_stripe_payment_id(self, payment_id: str) -> Optional[Donation]:
        result = await self.session.execute(select(Donation).where(Donation.stripe_payment_id == payment_id))
        return result.scalars().first()

    async def mark_completed(self, payment_id: str) -> Optional[Donation]:
        donation = await self.get_by_stripe_payment_id(payment_id)
        if donation is None:
            return None
        donation.status = DonationStatus.COMPLETED.value
        return await self.update(donation)
