"""
Study group entity models.

This module contains the group tables: groups themselves, membership with
roles, chat messages, invites, meetings, and AI-assisted discussions with
their answers. Child rows cascade when a group is deleted.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now

# ============================================================================
# Enumerations
# ============================================================================


class GroupRole(str, Enum):
    LEADER = "leader"
    MODERATOR = "moderator"
    MEMBER = "member"


class InviteStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class DiscussionStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class ReviewStatus(str, Enum):
    PENDING = "pending"
    EXCELLENT = "excellent"
    APPROVED = "approved"
    NEEDS_REVIEW = "needs_review"


# ============================================================================
# Groups and membership
# ============================================================================


class StudyGroup(Base, table=True):
    """Table: study_groups"""

    __tablename__ = "study_groups"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=120)
    description: Optional[str] = Field(default=None)
    leader_id: str = Field(foreign_key="users.id", index=True, max_length=64)
    is_public: bool = Field(default=True)
    image_url: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"<StudyGroup(id={self.id}, name={self.name}, public={self.is_public})>"


class GroupMember(Base, table=True):
    """Table: group_members"""

    __tablename__ = "group_members"
    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_group_members_group_user"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    group_id: int = Field(foreign_key="study_groups.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    role: str = Field(default=GroupRole.MEMBER.value, max_length=16)
    joined_at: datetime = Field(default_factory=utc_now)


class GroupMessage(Base, table=True):
    """Table: group_messages"""

    __tablename__ = "group_messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    group_id: int = Field(foreign_key="study_groups.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", max_length=64, ondelete="CASCADE")
    content: str
    reply_to_id: Optional[int] = Field(default=None)
    verse_reference: Optional[str] = Field(default=None, max_length=64)
    verse_text: Optional[str] = Field(default=None)
    message_type: str = Field(default="text", max_length=16)
    created_at: datetime = Field(default_factory=utc_now, index=True)


# ============================================================================
# Invites and meetings
# ============================================================================


class GroupInvite(Base, table=True):
    """Table: group_invites"""

    __tablename__ = "group_invites"

    id: Optional[int] = Field(default=None, primary_key=True)
    group_id: int = Field(foreign_key="study_groups.id", index=True, ondelete="CASCADE")
    invited_by: str = Field(foreign_key="users.id", max_length=64, ondelete="CASCADE")
    invited_email: Optional[str] = Field(default=None, max_length=255, index=True)
    invited_phone: Optional[str] = Field(default=None, max_length=32)
    invite_code: str = Field(unique=True, index=True, min_length=8, max_length=8)
    status: str = Field(default=InviteStatus.PENDING.value, max_length=16)
    expires_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)


class GroupMeeting(Base, table=True):
    """Table: group_meetings"""

    __tablename__ = "group_meetings"

    id: Optional[int] = Field(default=None, primary_key=True)
    group_id: int = Field(foreign_key="study_groups.id", index=True, ondelete="CASCADE")
    created_by: str = Field(foreign_key="users.id", max_length=64, ondelete="CASCADE")
    title: str = Field(default="Reunião", max_length=200)
    description: Optional[str] = Field(default=None)
    meeting_date: Optional[datetime] = Field(default=None)
    location: Optional[str] = Field(default=None, max_length=255)
    is_online: bool = Field(default=False)
    meeting_link: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)


# ============================================================================
# Discussions
# ============================================================================


class GroupDiscussion(Base, table=True):
    """Question posed to a group, optionally synthesized by the assistant.

    Table: group_discussions
    """

    __tablename__ = "group_discussions"

    id: Optional[int] = Field(default=None, primary_key=True)
    group_id: int = Field(foreign_key="study_groups.id", index=True, ondelete="CASCADE")
    created_by_id: str = Field(foreign_key="users.id", max_length=64, ondelete="CASCADE")
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None)
    question: str
    verse_reference: Optional[str] = Field(default=None, max_length=64)
    verse_text: Optional[str] = Field(default=None)
    status: str = Field(default=DiscussionStatus.OPEN.value, max_length=16)
    allow_anonymous: bool = Field(default=True)
    ai_synthesis: Optional[str] = Field(default=None)
    synthesized_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class GroupAnswer(Base, table=True):
    """Table: group_answers"""

    __tablename__ = "group_answers"

    id: Optional[int] = Field(default=None, primary_key=True)
    discussion_id: int = Field(foreign_key="group_discussions.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", max_length=64, ondelete="CASCADE")
    content: str
    verse_reference: Optional[str] = Field(default=None, max_length=64)
    is_anonymous: bool = Field(default=False)
    review_status: str = Field(default=ReviewStatus.PENDING.value, max_length=16)
    review_comment: Optional[str] = Field(default=None)
    reviewed_by: Optional[str] = Field(default=None, max_length=64)
    reviewed_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
