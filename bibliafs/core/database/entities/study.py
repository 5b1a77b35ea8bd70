"""
Personal study entity models.

This module contains the per-user study artifacts: prayers, notes,
highlights, bookmarks and Bible reader settings. Every row is owned by a
single user and only that user may modify or delete it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now


class Prayer(Base, table=True):
    """Prayer journal entry.

    Table: prayers
    """

    __tablename__ = "prayers"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    title: str = Field(max_length=200)
    content: Optional[str] = Field(default=None)
    audio_url: Optional[str] = Field(default=None, max_length=500)
    audio_duration: Optional[int] = Field(default=None, description="Seconds")
    location: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    is_answered: bool = Field(default=False)
    answered_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class Note(Base, table=True):
    """Study note attached to a chapter or verse.

    Table: notes
    """

    __tablename__ = "notes"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    book: str = Field(max_length=32)
    chapter: int
    verse: Optional[int] = Field(default=None)
    content: str
    tags: List[str] = Field(default_factory=list, sa_type=JSON)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class Highlight(Base, table=True):
    """Colored verse highlight.

    Table: highlights
    """

    __tablename__ = "highlights"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    book: str = Field(max_length=32)
    chapter: int
    verse: int
    verse_text: Optional[str] = Field(default=None)
    color: str = Field(default="yellow", max_length=32)
    created_at: datetime = Field(default_factory=utc_now, index=True)


class Bookmark(Base, table=True):
    """Saved verse with optional note and tags.

    Table: bookmarks
    """

    __tablename__ = "bookmarks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    book: str = Field(max_length=32)
    chapter: int
    verse: int
    verse_text: Optional[str] = Field(default=None)
    version: str = Field(default="nvi", max_length=16)
    note: Optional[str] = Field(default=None)
    tags: List[str] = Field(default_factory=list, sa_type=JSON)
    created_at: datetime = Field(default_factory=utc_now, index=True)


class BibleSettings(Base, table=True):
    """Bible reader preferences, one row per user.

    Table: bible_settings
    """

    __tablename__ = "bible_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, max_length=64, ondelete="CASCADE")
    preferred_version: str = Field(default="nvi", max_length=16)
    font_size: int = Field(default=16)
    line_height: int = Field(default=28)
    verse_numbers: bool = Field(default=True)
    red_letters: bool = Field(default=True)
    last_book: Optional[str] = Field(default=None, max_length=32)
    last_chapter: Optional[int] = Field(default=None)
    last_verse: Optional[int] = Field(default=None)
    updated_at: datetime = Field(default_factory=utc_now)
