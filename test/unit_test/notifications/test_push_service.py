"""Unit tests for web push subscriptions, preferences and delivery."""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
from pywebpush import WebPushException

from bibliafs.notifications import PushNotificationService, PushPayload
from bibliafs.server.core.config import WebPushConfig

VAPID = WebPushConfig(public_key="pub-key", private_key="priv-key", subject="mailto:test@example.com")


class RecordingSender:
    """Stands in for ``pywebpush.webpush``; endpoints listed in ``gone`` answer 410."""

    def __init__(self, gone: tuple = ()) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.gone = gone

    def __call__(self, **kwargs: Any) -> None:
        self.calls.append(kwargs)
        if kwargs["subscription_info"]["endpoint"] in self.gone:
            raise WebPushException("gone", response=SimpleNamespace(status_code=410, text="gone"))


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender(gone=("https://push.example/dead",))


@pytest.fixture
def push(repos, sender) -> PushNotificationService:
    return PushNotificationService(repos, VAPID, sender=sender)


class TestSubscriptions:
    async def test_save_takes_over_existing_endpoint(self, push, make_user):
        await make_user("u1")
        await make_user("u2")
        first = await push.save_subscription("u1", "https://push.example/a", "p1", "a1")

        second = await push.save_subscription("u2", "https://push.example/a", "p2", "a2", user_agent="Firefox")

        assert second.id == first.id
        assert second.user_id == "u2"
        assert second.p256dh == "p2"
        assert second.is_active is True

    async def test_remove_only_own_subscription(self, push, repos, make_user):
        await make_user("u1")
        await make_user("u2")
        await push.save_subscription("u1", "https://push.example/a", "p", "a")

        assert await push.remove_subscription("u2", "https://push.example/a") is False
        assert await push.remove_subscription("u1", "https://push.example/a") is True
        assert await repos.push_subscriptions.list_active_for_user("u1") == []


class TestPreferences:
    async def test_defaults_created_on_first_read(self, push, make_user):
        await make_user("u1")

        preferences = await push.get_preferences("u1")

        assert preferences.reading_reminder_time == "08:00"
        assert preferences.timezone == "America/Sao_Paulo"

    async def test_update_ignores_nulls_and_unknown_fields(self, push, make_user):
        await make_user("u1")

        preferences = await push.update_preferences(
            "u1", {"prayer_reminder_time": "21:30", "reading_reminders": None, "user_id": "hijack"}
        )

        assert preferences.prayer_reminder_time == "21:30"
        assert preferences.reading_reminders is True
        assert preferences.user_id == "u1"


class TestSend:
    async def test_delivers_to_every_active_subscription_and_records_history(self, push, repos, sender, make_user):
        await make_user("u1")
        await push.save_subscription("u1", "https://push.example/a", "p", "a")
        await push.save_subscription("u1", "https://push.example/b", "p", "a")

        result = await push.send("u1", PushPayload(title="Olá", body="Teste", tag="test", data={"url": "/"}))

        assert result.success is True
        assert result.sent == 2
        assert json.loads(sender.calls[0]["data"])["title"] == "Olá"
        assert sender.calls[0]["vapid_private_key"] == "priv-key"
        assert sender.calls[0]["vapid_claims"] == {"sub": "mailto:test@example.com"}
        history = await repos.notification_history.list_for_user("u1")
        assert len(history) == 1
        assert history[0].type == "test"

    async def test_gone_endpoint_is_deactivated(self, push, repos, make_user):
        await make_user("u1")
        await push.save_subscription("u1", "https://push.example/dead", "p", "a")
        await push.save_subscription("u1", "https://push.example/live", "p", "a")

        result = await push.send("u1", PushPayload(title="Olá", body="Teste"))

        assert (result.sent, result.failed) == (1, 1)
        active = await repos.push_subscriptions.list_active_for_user("u1")
        assert [s.endpoint for s in active] == ["https://push.example/live"]

    async def test_transport_error_counts_as_failure(self, repos, make_user):
        def unreachable_first(**kwargs: Any) -> None:
            if kwargs["subscription_info"]["endpoint"] == "https://push.example/down":
                raise ConnectionError("push service unreachable")

        push = PushNotificationService(repos, VAPID, sender=unreachable_first)
        await make_user("u1")
        await push.save_subscription("u1", "https://push.example/down", "p", "a")
        await push.save_subscription("u1", "https://push.example/up", "p", "a")

        result = await push.send("u1", PushPayload(title="Olá", body="Teste"))

        assert (result.success, result.sent, result.failed) == (True, 1, 1)
        assert await repos.notification_history.count_for_user("u1") == 1
        assert len(await repos.push_subscriptions.list_active_for_user("u1")) == 2

    async def test_no_subscriptions_means_no_history(self, push, repos, make_user):
        await make_user("u1")

        result = await push.send("u1", PushPayload(title="Olá", body="Teste"))

        assert result.success is False
        assert await repos.notification_history.count_for_user("u1") == 0

    async def test_unconfigured_vapid_skips(self, repos, sender, make_user):
        await make_user("u1")
        service = PushNotificationService(repos, WebPushConfig(), sender=sender)
        await service.save_subscription("u1", "https://push.example/a", "p", "a")

        result = await service.send("u1", PushPayload(title="Olá", body="Teste"))

        assert result.success is False
        assert sender.calls == []

    async def test_mark_clicked(self, push, make_user):
        await make_user("u1")
        await push.save_subscription("u1", "https://push.example/a", "p", "a")
        await push.send("u1", PushPayload(title="Olá", body="Teste"))
        entry = (await push.repos.notification_history.list_for_user("u1"))[0]

        clicked = await push.mark_clicked(entry.id)

        assert clicked.clicked is True
        assert clicked.clicked_at is not None
        assert await push.mark_clicked(9999) is None
