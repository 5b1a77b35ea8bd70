"""
Free-plan rules for study groups.

Free users get a 30 day trial of the group features, counted from the
earliest group they joined. During the trial a free user may lead one group
and belong to two, and a group led by a free user holds at most five members.
Paid plans have no limits.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.groups import StudyGroup
from bibliafs.core.database.entities.users import User
from bibliafs.core.database.repositories.bundle import RepoBundle

TRIAL_DAYS = 30
FREE_MAX_GROUPS_CREATE = 1
FREE_MAX_GROUPS_JOIN = 2
FREE_MAX_MEMBERS = 5

TRIAL_EXPIRED_MESSAGE = (
    "Seu período gratuito de 30 dias terminou. Conheça nossos planos premium para continuar."
)
CREATE_LIMIT_MESSAGE = (
    "Usuários gratuitos podem criar apenas 1 grupo. Assine um plano para criar grupos ilimitados."
)
JOIN_LIMIT_MESSAGE = (
    "Usuários gratuitos podem participar de até 2 grupos. Assine um plano para participar de grupos ilimitados."
)
MEMBER_CAP_MESSAGE = (
    "Este grupo atingiu o limite de 5 membros do plano gratuito. O líder precisa assinar um plano premium."
)


class GroupAccessError(Exception):
    """A plan or trial rule denies a group action."""

    def __init__(self, message: str, *, status_code: int = 403) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GroupLimits(BaseModel):
    is_premium: bool
    can_create_group: bool
    can_join_group: bool
    max_members: Optional[int]
    trial_expired: bool
    trial_days_remaining: Optional[int]
    trial_started: bool = False
    groups_created: int = 0
    groups_joined: int = 0
    max_groups_create: Optional[int] = None
    max_groups_join: Optional[int] = None
    functions_blocked: bool = False


class GroupAccessPolicy:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def trial_days_elapsed(self, user_id: str, now: Optional[datetime] = None) -> Optional[int]:
        """Whole days since the user's first membership, or None before any."""
        started = await self.repos.group_members.earliest_joined_at(user_id)
        if started is None:
            return None
        return ((now or utc_now()) - started).days

    async def limits(self, user: User, now: Optional[datetime] = None) -> GroupLimits:
        if user.is_premium:
            return GroupLimits(
                is_premium=True,
                can_create_group=True,
                can_join_group=True,
                max_members=None,
                trial_expired=False,
                trial_days_remaining=None,
            )

        created = await self.repos.groups.count_led_by(user.id)
        joined = await self.repos.group_members.count_memberships(user.id)
        elapsed = await self.trial_days_elapsed(user.id, now)
        trial_expired = elapsed is not None and elapsed > TRIAL_DAYS
        return GroupLimits(
            is_premium=False,
            can_create_group=created < FREE_MAX_GROUPS_CREATE,
            can_join_group=joined < FREE_MAX_GROUPS_JOIN,
            max_members=FREE_MAX_MEMBERS,
            trial_expired=trial_expired,
            trial_days_remaining=None if elapsed is None else max(0, TRIAL_DAYS - elapsed),
            trial_started=elapsed is not None,
            groups_created=created,
            groups_joined=joined,
            max_groups_create=FREE_MAX_GROUPS_CREATE,
            max_groups_join=FREE_MAX_GROUPS_JOIN,
            functions_blocked=trial_expired,
        )

    async def ensure_trial_active(self, user: User) -> None:
        if user.is_premium:
            return
        elapsed = await self.trial_days_elapsed(user.id)
        if elapsed is not None and elapsed > TRIAL_DAYS:
            raise GroupAccessError(TRIAL_EXPIRED_MESSAGE)

    async def ensure_can_create(self, user: User) -> None:
        await self.ensure_trial_active(user)
        if not user.is_premium and await self.repos.groups.count_led_by(user.id) >= FREE_MAX_GROUPS_CREATE:
            raise GroupAccessError(CREATE_LIMIT_MESSAGE)

    async def ensure_can_join(self, user: User) -> None:
        await self.ensure_trial_active(user)
        if not user.is_premium and await self.repos.group_members.count_memberships(user.id) >= FREE_MAX_GROUPS_JOIN:
            raise GroupAccessError(JOIN_LIMIT_MESSAGE)

    async def ensure_member_capacity(self, group: StudyGroup) -> None:
        """Raise when a free leader's group is already full."""
        if await self.repos.group_members.count_members(group.id) < FREE_MAX_MEMBERS:
            return
        leader = await self.repos.users.get_by_id(group.leader_id)
        if leader is None or not leader.is_premium:
            raise GroupAccessError(MEMBER_CAP_MESSAGE)
