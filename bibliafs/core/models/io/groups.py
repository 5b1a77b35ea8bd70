"""
Study group, invite, meeting and discussion I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class GroupCreate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=120)
    description: Optional[str] = None
    is_public: bool = False
    image_url: Optional[str] = Field(default=None, max_length=500)


class GroupUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=120)
    description: Optional[str] = None
    is_public: Optional[bool] = None
    image_url: Optional[str] = Field(default=None, max_length=500)


class MemberRoleUpdate(BaseModel):
    role: Optional[str] = None


class MessageCreate(BaseModel):
    content: Optional[str] = None
    reply_to_id: Optional[int] = None
    verse_reference: Optional[str] = Field(default=None, max_length=64)
    verse_text: Optional[str] = None
    message_type: str = Field(default="text", max_length=16)


class InviteCreate(BaseModel):
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)


class InviteAccept(BaseModel):
    code: Optional[str] = None


class MeetingCreate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    meeting_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, max_length=255)
    is_online: bool = False
    meeting_link: Optional[str] = Field(default=None, max_length=500)


class MeetingUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    meeting_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, max_length=255)
    is_online: Optional[bool] = None
    meeting_link: Optional[str] = Field(default=None, max_length=500)


class DiscussionCreate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    question: Optional[str] = None
    verse_reference: Optional[str] = Field(default=None, max_length=64)
    verse_text: Optional[str] = None
    allow_anonymous: bool = True
    use_ai: bool = False


class AnswerCreate(BaseModel):
    content: Optional[str] = None
    verse_reference: Optional[str] = Field(default=None, max_length=64)
    is_anonymous: bool = False


class AnswerReview(BaseModel):
    status: Optional[str] = None
    comment: Optional[str] = None
