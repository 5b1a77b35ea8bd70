"""
User repository.

Users are keyed by the identity provider's subject claim and are upserted on
every authenticated request.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.users import User
from .base import SQLModelRepository


class UserRepository(SQLModelRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get_by_stripe_customer(self, customer_id: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.stripe_customer_id == customer_id))
        return result.scalars().first()

    async def get_many(self, user_ids: Iterable[str]) -> Dict[str, User]:
        """Load several users at once, keyed by id."""
        ids = list(set(user_ids))
        if not ids:
            return {}
        result = await self.session.execute(select(User).where(User.id.in_(ids)))  # type: ignore[attr-defined]
        return {user.id: user for user in result.scalars().all()}

    async def upsert_from_claims(
        self,
        user_id: str,
        email: Optional[str],
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        """Create the user or refresh its profile from token claims.

        Profile fields are only overwritten when the claim carries a value.

        Args:
            user_id: Token subject
            email: Email claim
            first_name: ``user_metadata.first_name`` claim
            last_name: ``user_metadata.last_name`` claim

        Returns:
            The persisted User
        """
        user = await self.get_by_id(user_id)
        if user is None:
            user = User(id=user_id, email=email, first_name=first_name, last_name=last_name)
            return await self.create(user)

        changed = False
        for field, value in (("email", email), ("first_name", first_name), ("last_name", last_name)):
            if value and getattr(user, field) != value:
                setattr(user, field, value)
                changed = True
        if changed:
            user = await self.update(user)
        return user

    async def list_by_plan(self, plan: str) -> List[User]:
        result = await self.session.execute(select(User).where(User.subscription_plan == plan))
        return list(result.scalars().all())

    async def set_plan(
        self, user: User, plan: str, subscription_id: Optional[str] = None, customer_id: Optional[str] = None
    ) -> User:
        user.subscription_plan = plan
        user.stripe_subscription_id = subscription_id
        if customer_id:
            user.stripe_customer_id = customer_id
        user.updated_at = utc_now()
        return await self.update(user)
