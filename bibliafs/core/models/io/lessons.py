"""
Teacher lesson I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class LessonCreate(BaseModel):
    title: str = Field(max_length=200)
    description: Optional[str] = None
    scripture_references: List[Dict[str, Any]] = Field(default_factory=list)
    objectives: List[str] = Field(default_factory=list)
    content_blocks: List[Dict[str, Any]] = Field(default_factory=list)
    questions: List[Dict[str, Any]] = Field(
        default_factory=list, description="Items of {id, question, options, correct_answer}"
    )
    scheduled_for: Optional[datetime] = None
    is_published: bool = False


class LessonUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    scripture_references: Optional[List[Dict[str, Any]]] = None
    objectives: Optional[List[str]] = None
    content_blocks: Optional[List[Dict[str, Any]]] = None
    questions: Optional[List[Dict[str, Any]]] = None
    scheduled_for: Optional[datetime] = None
    is_published: Optional[bool] = None


class LessonProgressSubmit(BaseModel):
    answers: Dict[str, Any] = Field(default_factory=dict, description="Question id to chosen answer")
    is_completed: bool = True


class GenerateLessonRequest(BaseModel):
    title: Optional[str] = None
    scripture_base: Optional[str] = None
    duration: int = Field(default=50, ge=5, le=240)
    num_questions: Optional[int] = None


class TeacherAssistantRequest(BaseModel):
    question: Optional[str] = None
    context: Optional[str] = None
