"""
Prayer I/O models.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class PrayerCreate(BaseModel):
    title: str = Field(max_length=200)
    content: Optional[str] = None
    audio_url: Optional[str] = Field(default=None, max_length=500)
    audio_duration: Optional[int] = Field(default=None, ge=0)
    location: Optional[Dict[str, Any]] = None


class PrayerUpdate(BaseModel):
    """Client-supplied ``user_id`` and timestamps are ignored."""

    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None
    audio_url: Optional[str] = Field(default=None, max_length=500)
    audio_duration: Optional[int] = Field(default=None, ge=0)
    location: Optional[Dict[str, Any]] = None
    is_answered: Optional[bool] = None
