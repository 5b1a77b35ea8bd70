"""
AI assistant I/O models.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from bibliafs.ai.assistant import SearchHit


class StudyQuestion(BaseModel):
    question: Optional[str] = None
    book: Optional[str] = None
    chapter: Optional[int] = None
    verse: Optional[int] = None
    verse_text: Optional[str] = None
    chapter_verses: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Chapter verses as {number, text}"
    )


class StudyAnswer(BaseModel):
    answer: str
    remaining: int
    warning: Optional[str] = None


class AISearchRequest(BaseModel):
    query: Optional[str] = None


class AISearchResponse(BaseModel):
    query: str
    summary: str
    results: List[SearchHit]
