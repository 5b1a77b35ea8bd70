"""Unit tests for the user repository against in-memory SQLite."""

from __future__ import annotations

import pytest

from bibliafs.core.database.entities.users import User


class TestUpsertFromClaims:
    """Users are provisioned and refreshed from access token claims."""

    async def test_creates_missing_user(self, repos):
        user = await repos.users.upsert_from_claims("sub-1", "ana@example.com", first_name="Ana")

        assert user.id == "sub-1"
        assert user.email == "ana@example.com"
        assert user.first_name == "Ana"
        assert user.subscription_plan == "free"
        assert user.level == 1
        assert user.experience_points == 0

    async def test_refreshes_changed_fields_only(self, repos):
        await repos.users.upsert_from_claims("sub-1", "ana@example.com", first_name="Ana", last_name="Lima")

        user = await repos.users.upsert_from_claims("sub-1", "ana.lima@example.com", first_name=None)

        assert user.email == "ana.lima@example.com"
        assert user.first_name == "Ana"
        assert user.last_name == "Lima"
        assert await repos.users.count() == 1


class TestLookups:
    async def test_get_by_email_is_exact(self, repos, make_user):
        await make_user("u1", email="Joao@example.com")

        assert (await repos.users.get_by_email("Joao@example.com")).id == "u1"
        assert await repos.users.get_by_email("joao@example.com") is None

    async def test_get_many_keys_by_id(self, repos, make_user):
        await make_user("u1")
        await make_user("u2")

        users = await repos.users.get_many(["u1", "u2", "u1", "missing"])

        assert set(users) == {"u1", "u2"}
        assert await repos.users.get_many([]) == {}

    async def test_get_by_stripe_customer(self, repos, make_user):
        await make_user("u1", stripe_customer_id="cus_123")

        found = await repos.users.get_by_stripe_customer("cus_123")

        assert found is not None and found.id == "u1"


class TestSetPlan:
    async def test_set_plan_records_subscription(self, repos, make_user):
        user = await make_user("u1")

        await repos.users.set_plan(user, "monthly", subscription_id="sub_1", customer_id="cus_1")

        stored = await repos.users.get_by_id("u1")
        assert stored.subscription_plan == "monthly"
        assert stored.stripe_subscription_id == "sub_1"
        assert stored.stripe_customer_id == "cus_1"
        assert stored.is_premium is True

    async def test_reset_to_free_clears_subscription_keeps_customer(self, repos, make_user):
        user = await make_user("u1", subscription_plan="yearly", stripe_subscription_id="sub_1", stripe_customer_id="cus_1")

        await repos.users.set_plan(user, "free")

        assert user.subscription_plan == "free"
        assert user.stripe_subscription_id is None
        assert user.stripe_customer_id == "cus_1"
        assert user.is_premium is False


@pytest.mark.parametrize(
    "first,last,email,expected",
    [
        ("Ana", "Lima", None, "Ana Lima"),
        ("Ana", None, "ana@example.com", "Ana"),
        (None, None, "ana@example.com", "ana@example.com"),
        (None, None, None, "Membro"),
    ],
)
def test_display_name(first, last, email, expected):
    assert User(id="x", first_name=first, last_name=last, email=email).display_name == expected
