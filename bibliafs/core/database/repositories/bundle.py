"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
for easy dependency injection in routers and services.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .community import CommunityPostRepository
from .daily_verses import DailyVerseRepository
from .donations import DonationRepository
from .gamification import AchievementRepository, UserAchievementRepository
from .groups import (
    GroupAnswerRepository,
    GroupDiscussionRepository,
    GroupInviteRepository,
    GroupMeetingRepository,
    GroupMemberRepository,
    GroupMessageRepository,
    StudyGroupRepository,
)
from .lessons import LessonProgressRepository, LessonRepository
from .media import AudioProgressRepository, OfflineContentRepository
from .notifications import (
    NotificationHistoryRepository,
    NotificationPreferenceRepository,
    PushSubscriptionRepository,
)
from .podcasts import PodcastRepository, PodcastSubscriptionRepository
from .reading_plans import ReadingPlanRepository, ReadingPlanTemplateRepository
from .study import (
    BibleSettingsRepository,
    BookmarkRepository,
    HighlightRepository,
    NoteRepository,
    PrayerRepository,
)
from .users import UserRepository


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    session: AsyncSession
    users: UserRepository
    prayers: PrayerRepository
    notes: NoteRepository
    highlights: HighlightRepository
    bookmarks: BookmarkRepository
    bible_settings: BibleSettingsRepository
    plan_templates: ReadingPlanTemplateRepository
    reading_plans: ReadingPlanRepository
    achievements: AchievementRepository
    user_achievements: UserAchievementRepository
    podcasts: PodcastRepository
    podcast_subscriptions: PodcastSubscriptionRepository
    lessons: LessonRepository
    lesson_progress: LessonProgressRepository
    posts: CommunityPostRepository
    audio_progress: AudioProgressRepository
    offline_content: OfflineContentRepository
    daily_verses: DailyVerseRepository
    donations: DonationRepository
    groups: StudyGroupRepository
    group_members: GroupMemberRepository
    group_messages: GroupMessageRepository
    group_invites: GroupInviteRepository
    group_meetings: GroupMeetingRepository
    discussions: GroupDiscussionRepository
    answers: GroupAnswerRepository
    push_subscriptions: PushSubscriptionRepository
    notification_preferences: NotificationPreferenceRepository
    notification_history: NotificationHistoryRepository


def build_repos(session: AsyncSession) -> RepoBundle:
    """Build a RepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        session=session,
        users=UserRepository(session),
        prayers=PrayerRepository(session),
        notes=NoteRepository(session),
        highlights=HighlightRepository(session),
        bookmarks=BookmarkRepository(session),
        bible_settings=BibleSettingsRepository(session),
        plan_templates=ReadingPlanTemplateRepository(session),
        reading_plans=ReadingPlanRepository(session),
        achievements=AchievementRepository(session),
        user_achievements=UserAchievementRepository(session),
        podcasts=PodcastRepository(session),
        podcast_subscriptions=PodcastSubscriptionRepository(session),
        lessons=LessonRepository(session),
        lesson_progress=LessonProgressRepository(session),
        posts=CommunityPostRepository(session),
        audio_progress=AudioProgressRepository(session),
        offline_content=OfflineContentRepository(session),
        daily_verses=DailyVerseRepository(session),
        donations=DonationRepository(session),
        groups=StudyGroupRepository(session),
        group_members=GroupMemberRepository(session),
        group_messages=GroupMessageRepository(session),
        group_invites=GroupInviteRepository(session),
        group_meetings=GroupMeetingRepository(session),
        discussions=GroupDiscussionRepository(session),
        answers=GroupAnswerRepository(session),
        push_subscriptions=PushSubscriptionRepository(session),
        notification_preferences=NotificationPreferenceRepository(session),
        notification_history=NotificationHistoryRepository(session),
    )
