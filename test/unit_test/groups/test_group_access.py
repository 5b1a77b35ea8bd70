"""Unit tests for free-plan group limits and the trial window."""

from __future__ import annotations

from datetime import timedelta

import pytest

from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.groups import StudyGroup
from bibliafs.groups import GroupAccessError, GroupAccessPolicy
from bibliafs.groups.access import CREATE_LIMIT_MESSAGE, JOIN_LIMIT_MESSAGE, MEMBER_CAP_MESSAGE


async def _group(repos, leader_id: str, name: str = "Estudo") -> StudyGroup:
    return await repos.groups.create_with_leader(StudyGroup(name=name, leader_id=leader_id))


@pytest.fixture
def policy(repos) -> GroupAccessPolicy:
    return GroupAccessPolicy(repos)


class TestLimits:
    async def test_premium_user_has_no_limits(self, policy, repos, make_user):
        user = await make_user("u1", subscription_plan="monthly")
        await _group(repos, "u1")
        await _group(repos, "u1", "Outro")

        limits = await policy.limits(user)

        assert limits.is_premium is True
        assert limits.can_create_group is True
        assert limits.max_members is None

    async def test_fresh_free_user_has_not_started_trial(self, policy, make_user):
        user = await make_user("u1")

        limits = await policy.limits(user)

        assert limits.can_create_group is True
        assert limits.trial_started is False
        assert limits.trial_days_remaining is None
        assert limits.max_groups_join == 2

    async def test_counts_after_creating_group(self, policy, repos, make_user):
        user = await make_user("u1")
        await _group(repos, "u1")

        limits = await policy.limits(user)

        assert limits.groups_created == 1
        assert limits.groups_joined == 1
        assert limits.can_create_group is False
        assert limits.can_join_group is True
        assert limits.trial_days_remaining == 30

    async def test_trial_expires_after_thirty_days(self, policy, repos, make_user):
        user = await make_user("u1")
        await _group(repos, "u1")

        on_last_day = await policy.limits(user, now=utc_now() + timedelta(days=30))
        after = await policy.limits(user, now=utc_now() + timedelta(days=31))

        assert on_last_day.trial_expired is False
        assert after.trial_expired is True
        assert after.functions_blocked is True
        assert after.trial_days_remaining == 0


class TestEnforcement:
    async def test_free_user_can_create_only_one_group(self, policy, repos, make_user):
        user = await make_user("u1")
        await policy.ensure_can_create(user)
        await _group(repos, "u1")

        with pytest.raises(GroupAccessError) as exc_info:
            await policy.ensure_can_create(user)

        assert exc_info.value.message == CREATE_LIMIT_MESSAGE
        assert exc_info.value.status_code == 403

    async def test_free_user_can_join_two_groups(self, policy, repos, make_user):
        await make_user("leader", subscription_plan="yearly")
        user = await make_user("u1")
        first = await _group(repos, "leader", "A")
        second = await _group(repos, "leader", "B")
        await repos.group_members.add(first.id, "u1")
        await repos.group_members.add(second.id, "u1")

        with pytest.raises(GroupAccessError) as exc_info:
            await policy.ensure_can_join(user)

        assert exc_info.value.message == JOIN_LIMIT_MESSAGE

    async def test_expired_trial_blocks_free_user(self, policy, repos, make_user):
        user = await make_user("u1")
        group = await _group(repos, "u1")
        membership = await repos.group_members.get_membership(group.id, "u1")
        membership.joined_at = utc_now() - timedelta(days=45)
        await repos.group_members.update(membership)

        with pytest.raises(GroupAccessError):
            await policy.ensure_trial_active(user)

    async def test_free_leader_group_caps_at_five_members(self, policy, repos, make_user):
        await make_user("leader")
        group = await _group(repos, "leader")
        for n in range(4):
            await make_user(f"m{n}")
            await repos.group_members.add(group.id, f"m{n}")

        with pytest.raises(GroupAccessError) as exc_info:
            await policy.ensure_member_capacity(group)

        assert exc_info.value.message == MEMBER_CAP_MESSAGE

    async def test_premium_leader_group_is_uncapped(self, policy, repos, make_user):
        await make_user("leader", subscription_plan="premium_plus")
        group = await _group(repos, "leader")
        for n in range(5):
            await make_user(f"m{n}")
            await repos.group_members.add(group.id, f"m{n}")

        await policy.ensure_member_capacity(group)
