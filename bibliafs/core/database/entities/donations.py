"""
Donation entity model.

Amounts are stored in cents of ``currency``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class DonationType(str, Enum):
    ONE_TIME = "one_time"
    RECURRING = "recurring"


class DonationStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Donation(Base, table=True):
    """Table: donations"""

    __tablename__ = "donations"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    amount: int = Field(description="Amount in cents")
    currency: str = Field(default="brl", max_length=8)
    type: str = Field(default=DonationType.ONE_TIME.value, max_length=16)
    destination: str = Field(default="app_operations", max_length=64)
    is_anonymous: bool = Field(default=False)
    message: Optional[str] = Field(default=None)
    status: str = Field(default=DonationStatus.PENDING.value, max_length=16)
    stripe_payment_id: Optional[str] = Field(default=None, max_length=255, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"<Donation(id={self.id}, amount={self.amount} {self.currency}, status={self.status})>"
