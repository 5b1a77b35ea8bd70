"""
User and profile I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

THEMES = ("light", "dark", "sepia", "system")


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=120)
    last_name: Optional[str] = Field(default=None, max_length=120)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)


class ThemeUpdate(BaseModel):
    theme: Optional[str] = Field(default=None, description="One of light, dark, sepia or system")


class PublicProfile(BaseModel):
    """Profile fields other users may see."""

    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None

    class Config:
        from_attributes = True


class DashboardStats(BaseModel):
    active_plans: int
    completed_plans: int
    total_prayers: int
    answered_prayers: int
    notes: int
    highlights: int
    bookmarks: int
    community_posts: int


class ActivityItem(BaseModel):
    type: Literal["prayer", "post", "reading_plan"]
    id: int
    title: str
    timestamp: datetime


class RecentActivity(BaseModel):
    items: List[ActivityItem] = Field(default_factory=list)
