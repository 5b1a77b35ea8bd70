"""
Daily verse entity model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class DailyVerse(Base, table=True):
    """Verse assigned to a day of the year.

    Table: daily_verses
    """

    __tablename__ = "daily_verses"

    id: Optional[int] = Field(default=None, primary_key=True)
    day_of_year: int = Field(unique=True, index=True, ge=1, le=366)
    book: str = Field(max_length=32, description="Book abbreviation")
    chapter: int
    verse: int
    text: Optional[str] = Field(default=None)
    version: str = Field(default="nvi", max_length=16)
    theme: Optional[str] = Field(default=None, max_length=64)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"<DailyVerse(day={self.day_of_year}, ref={self.book} {self.chapter}:{self.verse})>"
