"""
Database entity models.

This package contains all database entity models organized by business domain.
Importing it registers every table on ``Base.metadata``.

Modules:
- users: Accounts, profile, XP and subscription state
- reading_plans: Plan templates and user reading plans
- gamification: Achievements and per-user unlocks
- study: Prayers, notes, highlights, bookmarks and reader settings
- podcasts: Podcasts and subscriptions
- lessons: Teacher lessons and student progress
- community: Community posts, likes and comments
- media: Audio progress and offline content
- daily_verses: Verse of the day
- donations: Donation records
- groups: Study groups, members, messages, invites, meetings, discussions
- notifications: Push subscriptions, preferences and history
"""

from . import (
    community,
    daily_verses,
    donations,
    gamification,
    groups,
    lessons,
    media,
    notifications,
    podcasts,
    reading_plans,
    study,
    users,
)
from .community import CommunityPost, PostComment, PostLike
from .daily_verses import DailyVerse
from .donations import Donation
from .gamification import Achievement, UserAchievement
from .groups import (
    GroupAnswer,
    GroupDiscussion,
    GroupInvite,
    GroupMeeting,
    GroupMember,
    GroupMessage,
    StudyGroup,
)
from .lessons import Lesson, LessonProgress
from .media import AudioProgress, OfflineContent
from .notifications import NotificationHistory, NotificationPreference, PushSubscription
from .podcasts import Podcast, PodcastSubscription
from .reading_plans import ReadingPlan, ReadingPlanTemplate
from .study import BibleSettings, Bookmark, Highlight, Note, Prayer
from .users import User

__all__ = [
    "community",
    "daily_verses",
    "donations",
    "gamification",
    "groups",
    "lessons",
    "media",
    "notifications",
    "podcasts",
    "reading_plans",
    "study",
    "users",
    "Achievement",
    "AudioProgress",
    "BibleSettings",
    "Bookmark",
    "CommunityPost",
    "DailyVerse",
    "Donation",
    "GroupAnswer",
    "GroupDiscussion",
    "GroupInvite",
    "GroupMeeting",
    "GroupMember",
    "GroupMessage",
    "Highlight",
    "Lesson",
    "LessonProgress",
    "Note",
    "NotificationHistory",
    "NotificationPreference",
    "OfflineContent",
    "Podcast",
    "PodcastSubscription",
    "PostComment",
    "PostLike",
    "Prayer",
    "PushSubscription",
    "ReadingPlan",
    "ReadingPlanTemplate",
    "StudyGroup",
    "User",
    "UserAchievement",
]
