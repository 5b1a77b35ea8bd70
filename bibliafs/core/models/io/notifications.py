"""
Push notification I/O models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class SubscriptionKeys(BaseModel):
    p256dh: Optional[str] = None
    auth: Optional[str] = None


class PushSubscribeRequest(BaseModel):
    endpoint: Optional[str] = None
    keys: Optional[SubscriptionKeys] = None


class PushUnsubscribeRequest(BaseModel):
    endpoint: Optional[str] = None


class NotificationPreferencesUpdate(BaseModel):
    reading_reminders: Optional[bool] = None
    reading_reminder_time: Optional[str] = Field(default=None, description="HH:MM")
    prayer_reminders: Optional[bool] = None
    prayer_reminder_time: Optional[str] = Field(default=None, description="HH:MM")
    daily_verse_notification: Optional[bool] = None
    daily_verse_time: Optional[str] = Field(default=None, description="HH:MM")
    community_activity: Optional[bool] = None
    teacher_mode_updates: Optional[bool] = None
    weekend_only: Optional[bool] = None
    timezone: Optional[str] = Field(default=None, description="IANA zone name")


class NotificationClicked(BaseModel):
    notification_id: int
