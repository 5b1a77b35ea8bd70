"""
Community feed entity models.

``like_count`` and ``comment_count`` on a post are denormalized counters kept
in step with the ``post_likes`` and ``post_comments`` tables.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now


class CommunityPost(Base, table=True):
    """Verse shared to the community feed.

    Table: community_posts
    """

    __tablename__ = "community_posts"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=64, ondelete="CASCADE")
    verse_reference: str = Field(max_length=64)
    verse_text: str
    note: Optional[str] = Field(default=None)
    like_count: int = Field(default=0)
    comment_count: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class PostLike(Base, table=True):
    """Table: post_likes"""

    __tablename__ = "post_likes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    post_id: int = Field(foreign_key="community_posts.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", max_length=64, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)


class PostComment(Base, table=True):
    """Table: post_comments"""

    __tablename__ = "post_comments"

    id: Optional[int] = Field(default=None, primary_key=True)
    post_id: int = Field(foreign_key="community_posts.id", index=True, ondelete="CASCADE")
    user_id: str = Field(foreign_key="users.id", max_length=64, ondelete="CASCADE")
    content: str
    created_at: datetime = Field(default_factory=utc_now)
