"""
Audio progress and offline content I/O models.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AudioProgressUpsert(BaseModel):
    book: str = Field(max_length=32)
    chapter: int = Field(ge=1)
    version: str = Field(default="nvi", max_length=16)
    current_time: float = Field(default=0.0, ge=0)
    duration: float = Field(default=0.0, ge=0)
    is_completed: Optional[bool] = None
    playback_speed: str = Field(default="1.0", max_length=8)


class OfflineContentUpsert(BaseModel):
    book: str = Field(max_length=32)
    chapter: int = Field(ge=1)
    version: str = Field(default="nvi", max_length=16)
    content: Dict[str, Any] = Field(default_factory=dict)
    size_bytes: Optional[int] = Field(default=None, ge=0)
