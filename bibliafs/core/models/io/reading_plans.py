"""
Reading plan I/O models.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ReadingPlanCreate(BaseModel):
    title: str = Field(max_length=200)
    description: Optional[str] = None
    total_days: int = Field(default=30, ge=1, le=1000)


class ReadingPlanFromTemplate(BaseModel):
    template_id: int


class CustomReadingPlanCreate(BaseModel):
    book: Optional[str] = None
    start_chapter: Optional[int] = None
    end_chapter: Optional[int] = None
    verses: Optional[str] = None
    title: Optional[str] = Field(default=None, max_length=200)


class ReadingPlanUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    current_day: Optional[int] = Field(default=None, ge=1)


class CompleteDayRequest(BaseModel):
    day: Any = Field(default=None, description="Day number to mark as read")
