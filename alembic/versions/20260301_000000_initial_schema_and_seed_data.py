"""Initial schema and seed data

Revision ID: 20260301_000000
Revises:
Create Date: 2026-03-01 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op
from bibliafs.gamification.seeds import ACHIEVEMENT_SEEDS, PLAN_TEMPLATE_SEEDS

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _user_fk() -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE")


def upgrade() -> None:
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(120), nullable=True),
        sa.Column("last_name", sa.String(120), nullable=True),
        sa.Column("profile_image_url", sa.String(500), nullable=True),
        sa.Column("theme", sa.String(16), nullable=False, server_default="light"),
        sa.Column("is_teacher", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("experience_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reading_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_read_date", sa.Date(), nullable=True),
        sa.Column("subscription_plan", sa.String(32), nullable=False, server_default="free"),
        sa.Column("stripe_customer_id", sa.String(128), nullable=True),
        sa.Column("stripe_subscription_id", sa.String(128), nullable=True),
        sa.Column("ai_requests_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("ai_requests_reset_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.Index("ix_users_email", "email"),
        sa.Index("ix_users_stripe_customer_id", "stripe_customer_id"),
    )

    # Create prayers table
    op.create_table(
        "prayers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("audio_url", sa.String(500), nullable=True),
        sa.Column("audio_duration", sa.Integer(), nullable=True),
        sa.Column("location", sa.JSON(), nullable=True),
        sa.Column("is_answered", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("answered_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.Index("ix_prayers_user_id", "user_id"),
        sa.Index("ix_prayers_created_at", "created_at"),
    )

    # Create notes table
    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("book", sa.String(32), nullable=False),
        sa.Column("chapter", sa.Integer(), nullable=False),
        sa.Column("verse", sa.Integer(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.Index("ix_notes_user_id", "user_id"),
        sa.Index("ix_notes_created_at", "created_at"),
    )

    # Create highlights table
    op.create_table(
        "highlights",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("book", sa.String(32), nullable=False),
        sa.Column("chapter", sa.Integer(), nullable=False),
        sa.Column("verse", sa.Integer(), nullable=False),
        sa.Column("verse_text", sa.Text(), nullable=True),
        sa.Column("color", sa.String(32), nullable=False, server_default="yellow"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.Index("ix_highlights_user_id", "user_id"),
        sa.Index("ix_highlights_created_at", "created_at"),
    )

    # Create bookmarks table
    op.create_table(
        "bookmarks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("book", sa.String(32), nullable=False),
        sa.Column("chapter", sa.Integer(), nullable=False),
        sa.Column("verse", sa.Integer(), nullable=False),
        sa.Column("verse_text", sa.Text(), nullable=True),
        sa.Column("version", sa.String(16), nullable=False, server_default="nvi"),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.Index("ix_bookmarks_user_id", "user_id"),
        sa.Index("ix_bookmarks_created_at", "created_at"),
    )

    # Create bible_settings table
    op.create_table(
        "bible_settings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("preferred_version", sa.String(16), nullable=False, server_default="nvi"),
        sa.Column("font_size", sa.Integer(), nullable=False, server_default="16"),
        sa.Column("line_height", sa.Integer(), nullable=False, server_default="28"),
        sa.Column("verse_numbers", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("red_letters", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_book", sa.String(32), nullable=True),
        sa.Column("last_chapter", sa.Integer(), nullable=True),
        sa.Column("last_verse", sa.Integer(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        _user_fk(),
    )

    # Create reading_plan_templates table
    templates = op.create_table(
        "reading_plan_templates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(64), nullable=True),
        sa.Column("difficulty", sa.String(32), nullable=True),
        sa.Column("schedule", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )

    # Create reading_plans table
    op.create_table(
        "reading_plans",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("plan_type", sa.String(16), nullable=False, server_default="manual"),
        sa.Column("schedule", sa.JSON(), nullable=False),
        sa.Column("current_day", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("total_days", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("started_at", sa.DateTime(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.ForeignKeyConstraint(["template_id"], ["reading_plan_templates.id"]),
        sa.Index("ix_reading_plans_user_id", "user_id"),
        sa.Index("ix_reading_plans_created_at", "created_at"),
    )

    # Create achievements table
    achievements = op.create_table(
        "achievements",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("icon", sa.String(64), nullable=False, server_default="trophy"),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("requirement", sa.JSON(), nullable=False),
        sa.Column("xp_reward", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # Create user_achievements table
    op.create_table(
        "user_achievements",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("achievement_id", sa.Integer(), nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_unlocked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("unlocked_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.ForeignKeyConstraint(["achievement_id"], ["achievements.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "achievement_id", name="uq_user_achievements_user_achievement"),
        sa.Index("ix_user_achievements_user_id", "user_id"),
    )

    # Create podcasts table
    op.create_table(
        "podcasts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("rss_url", sa.String(500), nullable=True),
        sa.Column("author", sa.String(200), nullable=True),
        sa.Column("category", sa.String(64), nullable=True),
        sa.Column("created_by", sa.String(64), nullable=True),
        sa.Column("episodes", sa.JSON(), nullable=False),
        sa.Column("subscriber_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.UniqueConstraint("rss_url"),
        sa.Index("ix_podcasts_created_by", "created_by"),
    )

    # Create podcast_subscriptions table
    op.create_table(
        "podcast_subscriptions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("podcast_id", sa.Integer(), nullable=False),
        sa.Column("current_episode_id", sa.String(64), nullable=True),
        sa.Column("current_position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("subscribed_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.ForeignKeyConstraint(["podcast_id"], ["podcasts.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "podcast_id", name="uq_podcast_subscriptions_user_podcast"),
        sa.Index("ix_podcast_subscriptions_user_id", "user_id"),
        sa.Index("ix_podcast_subscriptions_podcast_id", "podcast_id"),
    )

    # Create lessons table
    op.create_table(
        "lessons",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("teacher_id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("scripture_references", sa.JSON(), nullable=False),
        sa.Column("objectives", sa.JSON(), nullable=False),
        sa.Column("content_blocks", sa.JSON(), nullable=False),
        sa.Column("questions", sa.JSON(), nullable=False),
        sa.Column("scheduled_for", sa.DateTime(), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["teacher_id"], ["users.id"], ondelete="CASCADE"),
        sa.Index("ix_lessons_teacher_id", "teacher_id"),
        sa.Index("ix_lessons_created_at", "created_at"),
    )

    # Create lesson_progress table
    op.create_table(
        "lesson_progress",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("lesson_id", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.String(64), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["student_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("lesson_id", "student_id", name="uq_lesson_progress_lesson_student"),
        sa.Index("ix_lesson_progress_lesson_id", "lesson_id"),
        sa.Index("ix_lesson_progress_student_id", "student_id"),
    )

    # Create community tables
    op.create_table(
        "community_posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("verse_reference", sa.String(64), nullable=False),
        sa.Column("verse_text", sa.Text(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.Index("ix_community_posts_user_id", "user_id"),
        sa.Index("ix_community_posts_created_at", "created_at"),
    )
    op.create_table(
        "post_likes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["community_posts.id"], ondelete="CASCADE"),
        _user_fk(),
        sa.UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
        sa.Index("ix_post_likes_post_id", "post_id"),
    )
    op.create_table(
        "post_comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["community_posts.id"], ondelete="CASCADE"),
        _user_fk(),
        sa.Index("ix_post_comments_post_id", "post_id"),
    )

    # Create audio_progress and offline_content tables
    op.create_table(
        "audio_progress",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("book", sa.String(32), nullable=False),
        sa.Column("chapter", sa.Integer(), nullable=False),
        sa.Column("version", sa.String(16), nullable=False, server_default="nvi"),
        sa.Column("current_time", sa.Float(), nullable=False, server_default="0"),
        sa.Column("duration", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("playback_speed", sa.String(8), nullable=False, server_default="1.0"),
        sa.Column("last_played_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.UniqueConstraint("user_id", "book", "chapter", "version", name="uq_audio_progress_user_chapter"),
        sa.Index("ix_audio_progress_user_id", "user_id"),
        sa.Index("ix_audio_progress_last_played_at", "last_played_at"),
    )
    op.create_table(
        "offline_content",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("book", sa.String(32), nullable=False),
        sa.Column("chapter", sa.Integer(), nullable=False),
        sa.Column("version", sa.String(16), nullable=False, server_default="nvi"),
        sa.Column("content", sa.JSON(), nullable=False),
        sa.Column("size_bytes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downloaded_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.UniqueConstraint("user_id", "book", "chapter", "version", name="uq_offline_content_user_chapter"),
        sa.Index("ix_offline_content_user_id", "user_id"),
        sa.Index("ix_offline_content_downloaded_at", "downloaded_at"),
    )

    # Create daily_verses table
    op.create_table(
        "daily_verses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("day_of_year", sa.Integer(), nullable=False),
        sa.Column("book", sa.String(32), nullable=False),
        sa.Column("chapter", sa.Integer(), nullable=False),
        sa.Column("verse", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("version", sa.String(16), nullable=False, server_default="nvi"),
        sa.Column("theme", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("day_of_year"),
        sa.Index("ix_daily_verses_day_of_year", "day_of_year"),
    )

    # Create donations table
    op.create_table(
        "donations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(8), nullable=False, server_default="brl"),
        sa.Column("type", sa.String(16), nullable=False, server_default="one_time"),
        sa.Column("destination", sa.String(64), nullable=False, server_default="app_operations"),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("stripe_payment_id", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.Index("ix_donations_user_id", "user_id"),
        sa.Index("ix_donations_stripe_payment_id", "stripe_payment_id"),
        sa.Index("ix_donations_created_at", "created_at"),
    )

    # Create study group tables
    op.create_table(
        "study_groups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("leader_id", sa.String(64), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["leader_id"], ["users.id"]),
        sa.Index("ix_study_groups_leader_id", "leader_id"),
        sa.Index("ix_study_groups_created_at", "created_at"),
    )
    op.create_table(
        "group_members",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("group_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("role", sa.String(16), nullable=False, server_default="member"),
        sa.Column("joined_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["group_id"], ["study_groups.id"], ondelete="CASCADE"),
        _user_fk(),
        sa.UniqueConstraint("group_id", "user_id", name="uq_group_members_group_user"),
        sa.Index("ix_group_members_group_id", "group_id"),
        sa.Index("ix_group_members_user_id", "user_id"),
    )
    op.create_table(
        "group_messages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("group_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("reply_to_id", sa.Integer(), nullable=True),
        sa.Column("verse_reference", sa.String(64), nullable=True),
        sa.Column("verse_text", sa.Text(), nullable=True),
        sa.Column("message_type", sa.String(16), nullable=False, server_default="text"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["group_id"], ["study_groups.id"], ondelete="CASCADE"),
        _user_fk(),
        sa.Index("ix_group_messages_group_id", "group_id"),
        sa.Index("ix_group_messages_created_at", "created_at"),
    )
    op.create_table(
        "group_invites",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("group_id", sa.Integer(), nullable=False),
        sa.Column("invited_by", sa.String(64), nullable=False),
        sa.Column("invited_email", sa.String(255), nullable=True),
        sa.Column("invited_phone", sa.String(32), nullable=True),
        sa.Column("invite_code", sa.String(8), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["group_id"], ["study_groups.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invited_by"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("invite_code"),
        sa.Index("ix_group_invites_group_id", "group_id"),
        sa.Index("ix_group_invites_invited_email", "invited_email"),
        sa.Index("ix_group_invites_invite_code", "invite_code"),
    )
    op.create_table(
        "group_meetings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("group_id", sa.Integer(), nullable=False),
        sa.Column("created_by", sa.String(64), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("meeting_date", sa.DateTime(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("is_online", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("meeting_link", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["group_id"], ["study_groups.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="CASCADE"),
        sa.Index("ix_group_meetings_group_id", "group_id"),
    )
    op.create_table(
        "group_discussions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("group_id", sa.Integer(), nullable=False),
        sa.Column("created_by_id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("verse_reference", sa.String(64), nullable=True),
        sa.Column("verse_text", sa.Text(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="open"),
        sa.Column("allow_anonymous", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("ai_synthesis", sa.Text(), nullable=True),
        sa.Column("synthesized_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["group_id"], ["study_groups.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by_id"], ["users.id"], ondelete="CASCADE"),
        sa.Index("ix_group_discussions_group_id", "group_id"),
        sa.Index("ix_group_discussions_created_at", "created_at"),
    )
    op.create_table(
        "group_answers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("discussion_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("verse_reference", sa.String(64), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("review_status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("review_comment", sa.Text(), nullable=True),
        sa.Column("reviewed_by", sa.String(64), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["discussion_id"], ["group_discussions.id"], ondelete="CASCADE"),
        _user_fk(),
        sa.Index("ix_group_answers_discussion_id", "discussion_id"),
    )

    # Create notification tables
    op.create_table(
        "push_subscriptions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("endpoint", sa.String(1024), nullable=False),
        sa.Column("p256dh", sa.String(255), nullable=False),
        sa.Column("auth", sa.String(255), nullable=False),
        sa.Column("user_agent", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.UniqueConstraint("endpoint"),
        sa.Index("ix_push_subscriptions_user_id", "user_id"),
        sa.Index("ix_push_subscriptions_is_active", "is_active"),
    )
    op.create_table(
        "notification_preferences",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("reading_reminders", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("reading_reminder_time", sa.String(5), nullable=False, server_default="08:00"),
        sa.Column("prayer_reminders", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("prayer_reminder_time", sa.String(5), nullable=False, server_default="07:00"),
        sa.Column("daily_verse_notification", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("daily_verse_time", sa.String(5), nullable=False, server_default="06:00"),
        sa.Column("community_activity", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("teacher_mode_updates", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("weekend_only", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("timezone", sa.String(64), nullable=False, server_default="America/Sao_Paulo"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        _user_fk(),
    )
    op.create_table(
        "notification_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("type", sa.String(64), nullable=False, server_default="general"),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.Column("sent_at", sa.DateTime(), nullable=False),
        sa.Column("clicked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("clicked_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        _user_fk(),
        sa.Index("ix_notification_history_user_id", "user_id"),
        sa.Index("ix_notification_history_sent_at", "sent_at"),
    )

    # Seed built-in achievements and reading plan templates
    op.bulk_insert(achievements, ACHIEVEMENT_SEEDS)
    op.bulk_insert(templates, PLAN_TEMPLATE_SEEDS)


def downgrade() -> None:
    op.drop_table("notification_history")
    op.drop_table("notification_preferences")
    op.drop_table("push_subscriptions")
    op.drop_table("group_answers")
    op.drop_table("group_discussions")
    op.drop_table("group_meetings")
    op.drop_table("group_invites")
    op.drop_table("group_messages")
    op.drop_table("group_members")
    op.drop_table("study_groups")
    op.drop_table("donations")
    op.drop_table("daily_verses")
    op.drop_table("offline_content")
    op.drop_table("audio_progress")
    op.drop_table("post_comments")
    op.drop_table("post_likes")
    op.drop_table("community_posts")
    op.drop_table("lesson_progress")
    op.drop_table("lessons")
    op.drop_table("podcast_subscriptions")
    op.drop_table("podcasts")
    op.drop_table("user_achievements")
    op.drop_table("achievements")
    op.drop_table("reading_plans")
    op.drop_table("reading_plan_templates")
    op.drop_table("bible_settings")
    op.drop_table("bookmarks")
    op.drop_table("highlights")
    op.drop_table("notes")
    op.drop_table("prayers")
    op.drop_table("users")
