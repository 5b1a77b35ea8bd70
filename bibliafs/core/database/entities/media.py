"""
Audio playback and offline cache entity models.

Both tables are keyed by ``(user_id, book, chapter, version)`` and written
through upserts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import JSON, Field

from ..base import Base, utc_now


class AudioProgress(Base, table=True):
    """Playback position of an audio chapter.

    Table: audio_progress
    """

    __tablename__ = "audio_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "book", "chapter", "version", name="uq_audio_progress_user_chapter"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    book: str = Field(max_length=32)
    chapter: int
    version: str = Field(default="nvi", max_length=16)
    current_time: float = Field(default=0.0, description="Seconds")
    duration: float = Field(default=0.0, description="Seconds")
    is_completed: bool = Field(default=False)
    playback_speed: str = Field(default="1.0", max_length=8)
    last_played_at: datetime = Field(default_factory=utc_now, index=True)
    created_at: datetime = Field(default_factory=utc_now)


class OfflineContent(Base, table=True):
    """Chapter text cached on the device for offline reading.

    Table: offline_content
    """

    __tablename__ = "offline_content"
    __table_args__ = (
        UniqueConstraint("user_id", "book", "chapter", "version", name="uq_offline_content_user_chapter"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    book: str = Field(max_length=32)
    chapter: int
    version: str = Field(default="nvi", max_length=16)
    content: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    size_bytes: int = Field(default=0)
    downloaded_at: datetime = Field(default_factory=utc_now, index=True)
