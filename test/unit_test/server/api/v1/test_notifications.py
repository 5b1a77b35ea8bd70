"""Unit tests for push subscription, preference and delivery routes."""

from __future__ import annotations

import json

import pytest

from bibliafs.notifications import PushNotificationService
from bibliafs.server.api.v1.notifications import is_valid_timezone
from bibliafs.server.core.config import WebPushConfig
from bibliafs.server.main import app
from bibliafs.server.services.deps import RepoBundleDep, get_push_service

SUBSCRIPTION = {"endpoint": "https://push.test/device-1", "keys": {"p256dh": "BPk", "auth": "auth-secret"}}


@pytest.mark.parametrize(
    "name,expected", [("America/Sao_Paulo", True), ("UTC", True), ("Mars/Olympus", False)]
)
def test_is_valid_timezone(name, expected):
    assert is_valid_timezone(name) is expected


class TestSubscriptions:
    async def test_vapid_key(self, client):
        response = await client.get("/api/notifications/vapid-key")

        assert response.json() == {"public_key": "vapid-public"}

    async def test_vapid_key_unconfigured(self, client):
        def _push(repos: RepoBundleDep) -> PushNotificationService:
            return PushNotificationService(repos, WebPushConfig())

        app.dependency_overrides[get_push_service] = _push

        response = await client.get("/api/notifications/vapid-key")

        assert response.status_code == 503

    @pytest.mark.parametrize(
        "body",
        [{}, {"endpoint": "https://push.test/x"}, {"endpoint": "https://push.test/x", "keys": {"p256dh": "k"}}],
    )
    async def test_incomplete_subscription(self, client, token_for, body):
        response = await client.post("/api/notifications/subscribe", json=body, headers=token_for("u1"))

        assert response.status_code == 400

    async def test_endpoint_moves_to_latest_user(self, client, token_for, repos):
        first = await client.post("/api/notifications/subscribe", json=SUBSCRIPTION, headers=token_for("u1"))
        second = await client.post("/api/notifications/subscribe", json=SUBSCRIPTION, headers=token_for("u2"))

        assert first.status_code == 201
        assert second.json() == {"success": True, "id": first.json()["id"]}
        assert await repos.push_subscriptions.list_active_for_user("u1") == []
        assert len(await repos.push_subscriptions.list_active_for_user("u2")) == 1

    async def test_unsubscribe(self, client, token_for, repos):
        await client.post("/api/notifications/subscribe", json=SUBSCRIPTION, headers=token_for("u1"))
        body = {"endpoint": SUBSCRIPTION["endpoint"]}

        other = await client.post("/api/notifications/unsubscribe", json=body, headers=token_for("u2"))
        own = await client.post("/api/notifications/unsubscribe", json=body, headers=token_for("u1"))

        assert other.json() == {"success": False}
        assert own.json() == {"success": True}
        assert await repos.push_subscriptions.list_active_for_user("u1") == []


class TestPreferences:
    async def test_defaults_are_created_on_read(self, client, token_for):
        response = await client.get("/api/notifications/preferences", headers=token_for("u1"))

        assert response.json()["reading_reminder_time"] == "08:00"
        assert response.json()["timezone"] == "America/Sao_Paulo"

    async def test_partial_update(self, client, token_for):
        headers = token_for("u1")

        response = await client.patch(
            "/api/notifications/preferences",
            json={"prayer_reminders": False, "daily_verse_time": "05:30", "timezone": "Europe/Lisbon"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["prayer_reminders"] is False
        assert response.json()["daily_verse_time"] == "05:30"
        assert response.json()["timezone"] == "Europe/Lisbon"
        assert response.json()["reading_reminder_time"] == "08:00"

    @pytest.mark.parametrize(
        "patch",
        [{"reading_reminder_time": "8:00"}, {"prayer_reminder_time": "24:00"}, {"timezone": "Brasil/Curitiba"}],
    )
    async def test_invalid_values(self, client, token_for, patch):
        response = await client.patch("/api/notifications/preferences", json=patch, headers=token_for("u1"))

        assert response.status_code == 400


class TestDelivery:
    async def test_without_subscriptions(self, client, token_for, push_sender):
        response = await client.post("/api/notifications/test", headers=token_for("u1"))

        assert response.json() == {"success": False, "sent": 0, "failed": 0}
        assert push_sender.calls == []

    async def test_send_and_track_click(self, client, token_for, repos, push_sender):
        headers = token_for("u1")
        await client.post("/api/notifications/subscribe", json=SUBSCRIPTION, headers=headers)

        response = await client.post("/api/notifications/test", headers=headers)

        assert response.json() == {"success": True, "sent": 1, "failed": 0}
        call = push_sender.calls[0]
        assert call["subscription_info"] == {
            "endpoint": SUBSCRIPTION["endpoint"],
            "keys": {"p256dh": "BPk", "auth": "auth-secret"},
        }
        assert call["vapid_private_key"] == "vapid-private"
        assert json.loads(call["data"])["tag"] == "test"

        history = await repos.notification_history.list_for_user("u1")
        assert [entry.type for entry in history] == ["test"]

        clicked = await client.post(
            "/api/notifications/clicked", json={"notification_id": history[0].id}, headers=headers
        )
        assert clicked.json() == {"success": True}
        assert history[0].clicked is True

    async def test_click_unknown_notification(self, client, token_for):
        response = await client.post("/api/notifications/clicked", json={"notification_id": 999}, headers=token_for("u1"))

        assert response.status_code == 404
