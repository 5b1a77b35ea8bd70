"""
User entity model.

Users are provisioned on first authenticated request from the identity
provider's token claims; ``id`` is the token subject.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class User(Base, table=True):
    """Application user with profile, gamification and subscription state.

    Table: users
    """

    __tablename__ = "users"

    # Primary identifier (token subject)
    id: str = Field(primary_key=True, max_length=64)
    email: Optional[str] = Field(default=None, max_length=255, unique=True, index=True)
    first_name: Optional[str] = Field(default=None, max_length=120)
    last_name: Optional[str] = Field(default=None, max_length=120)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)
    theme: str = Field(default="light", max_length=16)
    is_teacher: bool = Field(default=False)

    # Gamification
    level: int = Field(default=1)
    experience_points: int = Field(default=0)
    reading_streak: int = Field(default=0)
    last_read_date: Optional[date] = Field(default=None)

    # Subscription and AI usage
    subscription_plan: str = Field(default="free", max_length=32)
    stripe_customer_id: Optional[str] = Field(default=None, max_length=128, index=True)
    stripe_subscription_id: Optional[str] = Field(default=None, max_length=128)
    ai_requests_count: int = Field(default=0)
    ai_requests_reset_at: Optional[datetime] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or (self.email or "Membro")

    @property
    def is_premium(self) -> bool:
        return self.subscription_plan != "free"

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, plan={self.subscription_plan})"
