"""
User, Profile and Dashboard Endpoints.

Covers the authenticated user's own record, profile and theme updates, the
dashboard counters, the recent activity feed and lookup by email.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from bibliafs.core.database.entities.users import User
from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.users import (
    THEMES,
    ActivityItem,
    DashboardStats,
    ProfileUpdate,
    PublicProfile,
    RecentActivity,
    ThemeUpdate,
)
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import RepoBundleDep

logger = get_logger(__name__)
router = APIRouter(tags=["users"])

RECENT_ACTIVITY_LIMIT = 5


@router.get(
    "/auth/user",
    response_model=User,
    summary="Current User",
    description="Return the authenticated user's record, provisioning it from the token claims on first use.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def get_auth_user(user: CurrentUser) -> User:
    return user


@router.patch(
    "/user/profile",
    response_model=User,
    summary="Update Profile",
    description="Update first name, last name and profile image of the current user.",
)
async def update_profile(body: ProfileUpdate, user: CurrentUser, repos: RepoBundleDep) -> User:
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    return await repos.users.update(user)


@router.patch(
    "/settings/theme",
    response_model=User,
    summary="Update Theme",
    description="Set the reader theme. Accepts light, dark, sepia or system.",
    responses={400: {"description": "Unknown theme"}},
)
async def update_theme(body: ThemeUpdate, user: CurrentUser, repos: RepoBundleDep) -> User:
    if body.theme not in THEMES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid theme")
    user.theme = body.theme
    return await repos.users.update(user)


@router.get(
    "/stats/dashboard",
    response_model=DashboardStats,
    summary="Dashboard Counters",
    description="Counts of the user's reading plans, prayers, notes, highlights, bookmarks and community posts.",
)
async def dashboard_stats(user: CurrentUser, repos: RepoBundleDep) -> DashboardStats:
    return DashboardStats(
        active_plans=await repos.reading_plans.count_for_user(user.id, is_completed=False),
        completed_plans=await repos.reading_plans.count_for_user(user.id, is_completed=True),
        total_prayers=await repos.prayers.count_for_user(user.id),
        answered_prayers=await repos.prayers.count_for_user(user.id, is_answered=True),
        notes=await repos.notes.count_for_user(user.id),
        highlights=await repos.highlights.count_for_user(user.id),
        bookmarks=await repos.bookmarks.count_for_user(user.id),
        community_posts=await repos.posts.count_for_user(user.id),
    )


@router.get(
    "/activity/recent",
    response_model=RecentActivity,
    summary="Recent Activity",
    description="Up to five recent items merged from prayers, own community posts and the latest reading plan.",
)
async def recent_activity(user: CurrentUser, repos: RepoBundleDep) -> RecentActivity:
    items = [
        ActivityItem(type="prayer", id=prayer.id, title=prayer.title, timestamp=prayer.created_at)
        for prayer in await repos.prayers.list_for_user(user.id, limit=2)
    ]
    items.extend(
        ActivityItem(type="post", id=post.id, title=post.verse_reference, timestamp=post.created_at)
        for post in await repos.posts.list_for_user(user.id, limit=2)
    )
    plan = await repos.reading_plans.get_latest_updated(user.id)
    if plan is not None:
        items.append(ActivityItem(type="reading_plan", id=plan.id, title=plan.title, timestamp=plan.updated_at))

    items.sort(key=lambda item: item.timestamp, reverse=True)
    return RecentActivity(items=items[:RECENT_ACTIVITY_LIMIT])


@router.get(
    "/users/search",
    response_model=PublicProfile,
    summary="Find User by Email",
    description="Exact, case-sensitive email lookup returning the public profile.",
    responses={400: {"description": "Email missing"}, 404: {"description": "No user with that email"}},
)
async def search_user(user: CurrentUser, repos: RepoBundleDep, email: Optional[str] = None) -> PublicProfile:
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is required")
    found = await repos.users.get_by_email(email.strip())
    if found is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return PublicProfile.model_validate(found)
