"""
Community feed I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    verse_reference: Optional[str] = Field(default=None, max_length=64)
    verse_text: Optional[str] = None
    note: Optional[str] = None


class PostUpdate(BaseModel):
    note: Optional[str] = None


class CommentCreate(BaseModel):
    content: Optional[str] = None


class AuthorInfo(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class PostRead(BaseModel):
    id: int
    user_id: str
    verse_reference: str
    verse_text: str
    note: Optional[str]
    like_count: int
    comment_count: int
    created_at: datetime
    liked_by_me: bool = False
    author: Optional[AuthorInfo] = None


class CommentRead(BaseModel):
    id: int
    post_id: int
    user_id: str
    content: str
    created_at: datetime
    author: Optional[AuthorInfo] = None
