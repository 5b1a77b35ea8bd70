"""
Push notification entity models.

Times in ``notification_preferences`` are ``HH:MM`` strings interpreted in the
row's ``timezone``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now


class PushSubscription(Base, table=True):
    """Browser push endpoint registered by a user.

    Table: push_subscriptions
    """

    __tablename__ = "push_subscriptions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    endpoint: str = Field(unique=True, max_length=1024)
    p256dh: str = Field(max_length=255)
    auth: str = Field(max_length=255)
    user_agent: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class NotificationPreference(Base, table=True):
    """Table: notification_preferences"""

    __tablename__ = "notification_preferences"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, max_length=64, ondelete="CASCADE")
    reading_reminders: bool = Field(default=True)
    reading_reminder_time: str = Field(default="08:00", max_length=5)
    prayer_reminders: bool = Field(default=True)
    prayer_reminder_time: str = Field(default="07:00", max_length=5)
    daily_verse_notification: bool = Field(default=True)
    daily_verse_time: str = Field(default="06:00", max_length=5)
    community_activity: bool = Field(default=False)
    teacher_mode_updates: bool = Field(default=True)
    weekend_only: bool = Field(default=False)
    timezone: str = Field(default="America/Sao_Paulo", max_length=64)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class NotificationHistory(Base, table=True):
    """Table: notification_history"""

    __tablename__ = "notification_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    type: str = Field(default="general", max_length=64)
    title: str = Field(max_length=200)
    body: str
    data: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    sent_at: datetime = Field(default_factory=utc_now, index=True)
    clicked: bool = Field(default=False)
    clicked_at: Optional[datetime] = Field(default=None)
