"""
Study group repositories.

This module covers groups, memberships, chat messages, invites, meetings and
discussions. Group deletion removes every child row explicitly so the
behavior does not depend on the database enforcing ``ON DELETE CASCADE``.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.groups import (
    GroupAnswer,
    GroupDiscussion,
    GroupInvite,
    GroupMeeting,
    GroupMember,
    GroupMessage,
    GroupRole,
    InviteStatus,
    StudyGroup,
)
from ..entities.users import User
from .base import SQLModelRepository, UserOwnedRepository

# ============================================================================
# Groups and membership
# ============================================================================


class StudyGroupRepository(SQLModelRepository[StudyGroup]):
    """Repository for study groups."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, StudyGroup)

    async def list_public(self) -> List[StudyGroup]:
        result = await self.session.execute(self._ordered(select(StudyGroup).where(StudyGroup.is_public == True)))  # noqa: E712
        return list(result.scalars().all())

    async def list_for_member(self, user_id: str) -> List[Tuple[StudyGroup, GroupMember]]:
        stmt = (
            select(StudyGroup, GroupMember)
            .join(GroupMember, GroupMember.group_id == StudyGroup.id)
            .where(GroupMember.user_id == user_id)
            .order_by(GroupMember.joined_at.desc(), GroupMember.id.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def count_led_by(self, user_id: str) -> int:
        return await self.count({"leader_id": user_id})

    async def create_with_leader(self, group: StudyGroup) -> StudyGroup:
        """Persist a new group and add its leader as the first member."""
        self.session.add(group)
        await self.session.flush()
        self.session.add(GroupMember(group_id=group.id, user_id=group.leader_id, role=GroupRole.LEADER.value))  # type: ignore[arg-type]
        await self.session.commit()
        await self.session.refresh(group)
        return group

    async def delete(self, entity_id: str | int) -> bool:
        discussion_ids = select(GroupDiscussion.id).where(GroupDiscussion.group_id == entity_id)
        await self.session.execute(sa_delete(GroupAnswer).where(GroupAnswer.discussion_id.in_(discussion_ids)))  # type: ignore[attr-defined]
        for child in (GroupDiscussion, GroupMeeting, GroupInvite, GroupMessage, GroupMember):
            await self.session.execute(sa_delete(child).where(child.group_id == entity_id))  # type: ignore[attr-defined]
        return await super().delete(entity_id)


class GroupMemberRepository(SQLModelRepository[GroupMember]):
    """Repository for group membership and roles."""

    order_by = "joined_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GroupMember)

    async def get_membership(self, group_id: int, user_id: str) -> Optional[GroupMember]:
        stmt = select(GroupMember).where(GroupMember.group_id == group_id, GroupMember.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_with_users(self, group_id: int) -> List[Tuple[GroupMember, Optional[User]]]:
        stmt = (
            select(GroupMember, User)
            .join(User, User.id == GroupMember.user_id, isouter=True)
            .where(GroupMember.group_id == group_id)
            .order_by(GroupMember.joined_at, GroupMember.id)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def count_members(self, group_id: int) -> int:
        return await self.count({"group_id": group_id})

    async def count_memberships(self, user_id: str) -> int:
        return await self.count({"user_id": user_id})

    async def earliest_joined_at(self, user_id: str) -> Optional[datetime]:
        stmt = select(func.min(GroupMember.joined_at)).where(GroupMember.user_id == user_id)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def add(self, group_id: int, user_id: str, role: str = GroupRole.MEMBER.value) -> GroupMember:
        return await self.create(GroupMember(group_id=group_id, user_id=user_id, role=role))

    async def remove(self, group_id: int, user_id: str) -> bool:
        stmt = sa_delete(GroupMember).where(GroupMember.group_id == group_id, GroupMember.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return (result.rowcount or 0) > 0

    async def is_member_email(self, group_id: int, email: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(GroupMember)
            .join(User, User.id == GroupMember.user_id)
            .where(GroupMember.group_id == group_id, User.email == email)
        )
        return int((await self.session.execute(stmt)).scalar_one()) > 0


# ============================================================================
# Messages, invites and meetings
# ============================================================================


class GroupMessageRepository(UserOwnedRepository[GroupMessage]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GroupMessage)

    async def list_with_users(self, group_id: int, limit: int = 100) -> List[Tuple[GroupMessage, Optional[User]]]:
        """Latest ``limit`` messages of a group, oldest first."""
        stmt = (
            select(GroupMessage, User)
            .join(User, User.id == GroupMessage.user_id, isouter=True)
            .where(GroupMessage.group_id == group_id)
            .order_by(GroupMessage.created_at.desc(), GroupMessage.id.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        rows = [(row[0], row[1]) for row in result.all()]
        rows.reverse()
        return rows


class GroupInviteRepository(SQLModelRepository[GroupInvite]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GroupInvite)

    async def get_by_code(self, code: str) -> Optional[GroupInvite]:
        result = await self.session.execute(select(GroupInvite).where(GroupInvite.invite_code == code))
        return result.scalars().first()

    async def code_exists(self, code: str) -> bool:
        return await self.get_by_code(code) is not None

    async def has_pending_for_email(self, group_id: int, email: str) -> bool:
        stmt = select(GroupInvite.id).where(
            GroupInvite.group_id == group_id,
            GroupInvite.invited_email == email,
            GroupInvite.status == InviteStatus.PENDING.value,
        )
        return (await self.session.execute(stmt)).first() is not None

    async def list_for_group(self, group_id: int) -> List[GroupInvite]:
        result = await self.session.execute(self._ordered(select(GroupInvite).where(GroupInvite.group_id == group_id)))
        return list(result.scalars().all())

    async def list_pending_for_email(self, email: str) -> List[Tuple[GroupInvite, StudyGroup]]:
        stmt = (
            select(GroupInvite, StudyGroup)
            .join(StudyGroup, StudyGroup.id == GroupInvite.group_id)
            .where(GroupInvite.invited_email == email, GroupInvite.status == InviteStatus.PENDING.value)
            .order_by(GroupInvite.created_at.desc(), GroupInvite.id.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]


class GroupMeetingRepository(SQLModelRepository[GroupMeeting]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GroupMeeting)

    async def list_for_group(self, group_id: int) -> List[GroupMeeting]:
        stmt = (
            select(GroupMeeting)
            .where(GroupMeeting.group_id == group_id)
            .order_by(GroupMeeting.meeting_date, GroupMeeting.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


# ============================================================================
# Discussions
# ============================================================================


class GroupDiscussionRepository(SQLModelRepository[GroupDiscussion]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GroupDiscussion)

    async def list_for_group(self, group_id: int) -> List[GroupDiscussion]:
        result = await self.session.execute(
            self._ordered(select(GroupDiscussion).where(GroupDiscussion.group_id == group_id))
        )
        return list(result.scalars().all())


class GroupAnswerRepository(SQLModelRepository[GroupAnswer]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GroupAnswer)

    async def list_with_users(self, discussion_id: int) -> List[Tuple[GroupAnswer, Optional[User]]]:
        stmt = (
            select(GroupAnswer, User)
            .join(User, User.id == GroupAnswer.user_id, isouter=True)
            .where(GroupAnswer.discussion_id == discussion_id)
            .order_by(GroupAnswer.created_at, GroupAnswer.id)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]
