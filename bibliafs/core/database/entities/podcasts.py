"""
Podcast entity models.

Episodes are stored inline on the podcast as a JSON list; subscriptions keep
per-user playback position and drive ``subscriber_count``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import JSON, Field

from ..base import Base, utc_now


class Podcast(Base, table=True):
    """Podcast channel.

    Table: podcasts
    """

    __tablename__ = "podcasts"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None)
    image_url: Optional[str] = Field(default=None, max_length=500)
    rss_url: Optional[str] = Field(default=None, max_length=500, unique=True)
    author: Optional[str] = Field(default=None, max_length=200)
    category: Optional[str] = Field(default=None, max_length=64)
    created_by: Optional[str] = Field(default=None, foreign_key="users.id", index=True, max_length=64)
    episodes: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    subscriber_count: int = Field(default=0)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class PodcastSubscription(Base, table=True):
    """A user's subscription to a podcast.

    Table: podcast_subscriptions
    """

    __tablename__ = "podcast_subscriptions"
    __table_args__ = (UniqueConstraint("user_id", "podcast_id", name="uq_podcast_subscriptions_user_podcast"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    podcast_id: int = Field(foreign_key="podcasts.id", index=True, ondelete="CASCADE")
    current_episode_id: Optional[str] = Field(default=None, max_length=64)
    current_position: int = Field(default=0, description="Seconds")
    subscribed_at: datetime = Field(default_factory=utc_now)
