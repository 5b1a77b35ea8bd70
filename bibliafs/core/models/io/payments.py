"""
Donation and subscription I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DonationCheckoutRequest(BaseModel):
    amount: int = Field(description="Amount in cents")
    type: str = Field(default="one_time", description="one_time or recurring")
    destination: Optional[str] = Field(default=None, max_length=64)
    is_anonymous: bool = False
    message: Optional[str] = None


class DonationCreate(BaseModel):
    amount: int = Field(description="Amount in cents")
    currency: str = Field(default="brl", max_length=8)
    type: str = Field(default="one_time")
    destination: Optional[str] = Field(default=None, max_length=64)
    is_anonymous: bool = False
    message: Optional[str] = None
    stripe_payment_id: Optional[str] = Field(default=None, max_length=255)


class PaymentIntentRequest(BaseModel):
    amount: int = Field(description="Amount in cents")


class CheckoutSessionResponse(BaseModel):
    url: Optional[str]
    session_id: str


class SubscriptionCheckoutRequest(BaseModel):
    price_id: Optional[str] = None
    plan_type: Optional[str] = None


class SubscriptionStatus(BaseModel):
    plan: str
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    ai_requests_count: int = 0
    ai_requests_reset_at: Optional[datetime] = None
