"""
Bible text, annotation and reading-progress I/O models.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class BookmarkCreate(BaseModel):
    book: str = Field(max_length=32)
    chapter: int = Field(ge=1)
    verse: int = Field(ge=1)
    verse_text: Optional[str] = None
    version: str = Field(default="nvi", max_length=16)
    note: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class HighlightCreate(BaseModel):
    book: str = Field(max_length=32)
    chapter: int = Field(ge=1)
    verse: int = Field(ge=1)
    verse_text: Optional[str] = None
    color: str = Field(default="yellow", max_length=32)


class NoteCreate(BaseModel):
    book: str = Field(max_length=32)
    chapter: int = Field(ge=1)
    verse: Optional[int] = Field(default=None, ge=1)
    content: str
    tags: List[str] = Field(default_factory=list)


class BibleSettingsUpdate(BaseModel):
    preferred_version: Optional[str] = Field(default=None, max_length=16)
    font_size: Optional[int] = Field(default=None, ge=8, le=48)
    line_height: Optional[int] = Field(default=None, ge=10, le=80)
    verse_numbers: Optional[bool] = None
    red_letters: Optional[bool] = None
    last_book: Optional[str] = Field(default=None, max_length=32)
    last_chapter: Optional[int] = Field(default=None, ge=1)
    last_verse: Optional[int] = Field(default=None, ge=1)


class MarkReadRequest(BaseModel):
    book: Optional[str] = None
    chapter: Optional[int] = None


class DailyVerseCreate(BaseModel):
    day_of_year: int = Field(ge=1, le=366)
    book: str = Field(max_length=32)
    chapter: int = Field(ge=1)
    verse: int = Field(ge=1)
    text: Optional[str] = None
    version: str = Field(default="nvi", max_length=16)
    theme: Optional[str] = Field(default=None, max_length=64)


class DailyVerseRead(BaseModel):
    id: Optional[int]
    reference: str
    text: Optional[str]
    version: str
    theme: Optional[str]
    day_of_year: int
