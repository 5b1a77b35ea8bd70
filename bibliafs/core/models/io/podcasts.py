"""
Podcast I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PodcastCreate(BaseModel):
    title: str = Field(max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=500)
    rss_url: Optional[str] = Field(default=None, max_length=500)
    author: Optional[str] = Field(default=None, max_length=200)
    category: Optional[str] = Field(default=None, max_length=64)


class PodcastUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=500)
    author: Optional[str] = Field(default=None, max_length=200)
    category: Optional[str] = Field(default=None, max_length=64)
    is_active: Optional[bool] = None


class EpisodeCreate(BaseModel):
    title: str = Field(max_length=200)
    description: Optional[str] = None
    audio_url: str = Field(max_length=1000)
    duration: Optional[int] = Field(default=None, ge=0, description="Seconds")
    published_at: Optional[datetime] = None


class PodcastSubscribeRequest(BaseModel):
    podcast_id: int
