"""Unit tests for the per-plan AI request quota."""

from __future__ import annotations

from datetime import datetime

import pytest

from bibliafs.ai import AIQuotaExceededError, AIQuotaService
from bibliafs.ai.quota import add_months

NOW = datetime(2026, 3, 10, 12, 0, 0)


@pytest.fixture
def quota(repos) -> AIQuotaService:
    return AIQuotaService(repos.users)


class TestCheck:
    async def test_fresh_free_user(self, quota, make_user):
        user = await make_user("u1")

        status = quota.check(user, NOW)

        assert status.allowed is True
        assert status.remaining == 20
        assert status.limit == 20
        assert status.message is None

    async def test_warning_near_limit(self, quota, make_user):
        user = await make_user("u1", ai_requests_count=15)

        status = quota.check(user, NOW)

        assert status.allowed is True
        assert status.remaining == 5
        assert "5 perguntas restantes" in status.message

    async def test_free_exhausted_is_denied(self, quota, make_user):
        user = await make_user("u1", ai_requests_count=20)

        status = quota.check(user, NOW)

        assert status.allowed is False
        assert status.remaining == 0
        assert "gratuitas" in status.message
        with pytest.raises(AIQuotaExceededError):
            quota.ensure_allowed(user)

    async def test_unknown_plan_counts_as_free(self, quota, make_user):
        user = await make_user("u1", subscription_plan="legacy", ai_requests_count=3)

        status = quota.check(user, NOW)

        assert status.plan == "free"
        assert status.limit == 20

    async def test_expired_period_counts_as_empty(self, quota, make_user):
        user = await make_user(
            "u1", subscription_plan="monthly", ai_requests_count=500, ai_requests_reset_at=datetime(2026, 3, 1)
        )

        status = quota.check(user, NOW)

        assert status.allowed is True
        assert status.remaining == 500


class TestConsume:
    async def test_free_plan_never_resets(self, quota, repos, make_user):
        user = await make_user("u1", ai_requests_count=19)

        status = await quota.consume(user, NOW)

        assert status.allowed is False
        assert user.ai_requests_count == 20
        assert user.ai_requests_reset_at is None
        assert (await repos.users.get_by_id("u1")).ai_requests_count == 20

    async def test_paid_plan_opens_period(self, quota, make_user):
        user = await make_user("u1", subscription_plan="monthly")

        status = await quota.consume(user, NOW)

        assert user.ai_requests_count == 1
        assert user.ai_requests_reset_at == datetime(2026, 4, 10, 12, 0, 0)
        assert status.remaining == 499

    async def test_yearly_period_restarts_after_reset(self, quota, make_user):
        user = await make_user(
            "u1", subscription_plan="yearly", ai_requests_count=3000, ai_requests_reset_at=datetime(2026, 1, 1)
        )

        await quota.consume(user, NOW)

        assert user.ai_requests_count == 1
        assert user.ai_requests_reset_at == datetime(2027, 3, 10, 12, 0, 0)


@pytest.mark.parametrize(
    "moment,months,expected",
    [
        (datetime(2026, 1, 31), 1, datetime(2026, 2, 28)),
        (datetime(2024, 1, 31), 1, datetime(2024, 2, 29)),
        (datetime(2026, 12, 15), 1, datetime(2027, 1, 15)),
        (datetime(2024, 2, 29), 12, datetime(2025, 2, 28)),
    ],
)
def test_add_months_clamps_day(moment, months, expected):
    assert add_months(moment, months) == expected
