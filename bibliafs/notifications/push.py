"""
Web push delivery.

``PushNotificationService`` stores browser subscriptions and preferences and
delivers payloads through ``pywebpush``. Delivery is a blocking HTTP call, so
each send runs in a worker thread. Endpoints that answer 404 or 410 are gone
for good and get deactivated.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Literal, Optional

from pydantic import BaseModel, Field
from pywebpush import WebPushException, webpush

from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.notifications import (
    NotificationHistory,
    NotificationPreference,
    PushSubscription,
)
from bibliafs.core.database.repositories.bundle import RepoBundle
from bibliafs.server.core.config import WebPushConfig

logger = logging.getLogger(__name__)

GONE_STATUS_CODES = (404, 410)

READING_INSIGHTS = (
    "Dedique 15 minutos hoje para meditar na Palavra de Deus.",
    "A leitura bíblica transforma corações. Que tal começar agora?",
    "Cada versículo lido é uma semente plantada em seu coração.",
    "Não deixe passar o dia sem alimentar sua alma com a Palavra.",
    "A Bíblia tem uma mensagem especial para você hoje. Descubra!",
    "Sua jornada de fé cresce a cada página lida.",
    "Reserve um momento de paz para a leitura bíblica.",
    "A Palavra de Deus é lâmpada para os seus pés.",
)

PRAYER_INSIGHTS = (
    "Comece o dia conversando com Deus em oração.",
    "A oração é o momento de intimidade com o Pai.",
    "Deus está esperando para ouvir seu coração.",
    "Reserve um tempo para agradecer pelas bênçãos recebidas.",
    "A oração sincera move montanhas.",
)


def random_insight(kind: Literal["reading", "prayer"]) -> str:
    return random.choice(READING_INSIGHTS if kind == "reading" else PRAYER_INSIGHTS)


class PushPayload(BaseModel):
    """Notification shown by the service worker."""

    title: str
    body: str
    icon: Optional[str] = None
    badge: Optional[str] = None
    tag: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    actions: list[Dict[str, str]] = Field(default_factory=list)
    require_interaction: bool = False


@dataclass
class SendResult:
    success: bool
    sent: int = 0
    failed: int = 0


@dataclass
class BulkSendResult:
    total: int
    sent: int
    failed: int


PREFERENCE_FIELDS = (
    "reading_reminders",
    "reading_reminder_time",
    "prayer_reminders",
    "prayer_reminder_time",
    "daily_verse_notification",
    "daily_verse_time",
    "community_activity",
    "teacher_mode_updates",
    "weekend_only",
    "timezone",
)


class PushNotificationService:
    """Subscriptions, preferences and delivery of web push notifications."""

    def __init__(
        self,
        repos: RepoBundle,
        config: WebPushConfig,
        sender: Callable[..., Any] = webpush,
    ) -> None:
        """
        Args:
            repos: Repositories bound to the caller's session.
            config: VAPID keys and subject.
            sender: Function with the ``pywebpush.webpush`` signature.
        """
        self.repos = repos
        self.config = config
        self._sender = sender

    @property
    def vapid_public_key(self) -> Optional[str]:
        return self.config.public_key

    async def save_subscription(
        self, user_id: str, endpoint: str, p256dh: str, auth: str, user_agent: Optional[str] = None
    ) -> PushSubscription:
        """Register an endpoint for ``user_id``, taking it over if another row already holds it."""
        existing = await self.repos.push_subscriptions.get_by_endpoint(endpoint)
        if existing is None:
            subscription = PushSubscription(
                user_id=user_id, endpoint=endpoint, p256dh=p256dh, auth=auth, user_agent=user_agent
            )
            return await self.repos.push_subscriptions.create(subscription)

        existing.user_id = user_id
        existing.p256dh = p256dh
        existing.auth = auth
        existing.user_agent = user_agent
        existing.is_active = True
        existing.updated_at = utc_now()
        return await self.repos.push_subscriptions.update(existing)

    async def remove_subscription(self, user_id: str, endpoint: str) -> bool:
        subscription = await self.repos.push_subscriptions.get_by_endpoint(endpoint)
        if subscription is None or subscription.user_id != user_id:
            return False
        await self.repos.push_subscriptions.deactivate(subscription)
        return True

    async def get_preferences(self, user_id: str) -> NotificationPreference:
        preferences = await self.repos.notification_preferences.get_for_user(user_id)
        if preferences is None:
            preferences = await self.repos.notification_preferences.create(NotificationPreference(user_id=user_id))
        return preferences

    async def update_preferences(self, user_id: str, patch: Dict[str, Any]) -> NotificationPreference:
        preferences = await self.get_preferences(user_id)
        for field in PREFERENCE_FIELDS:
            if field in patch and patch[field] is not None:
                setattr(preferences, field, patch[field])
        preferences.updated_at = utc_now()
        return await self.repos.notification_preferences.update(preferences)

    async def _deliver(self, subscription: PushSubscription, data: str) -> None:
        await asyncio.to_thread(
            self._sender,
            subscription_info={
                "endpoint": subscription.endpoint,
                "keys": {"p256dh": subscription.p256dh, "auth": subscription.auth},
            },
            data=data,
            vapid_private_key=self.config.private_key,
            vapid_claims={"sub": self.config.subject},
        )

    async def send(self, user_id: str, payload: PushPayload) -> SendResult:
        """Send ``payload`` to every active subscription of ``user_id``.

        A history row is written whenever at least one subscription exists.
        """
        if not self.config.is_configured:
            logger.debug("VAPID keys not configured, skipping notification")
            return SendResult(success=False)

        subscriptions = await self.repos.push_subscriptions.list_active_for_user(user_id)
        if not subscriptions:
            logger.debug(f"No active push subscriptions for user {user_id}")
            return SendResult(success=False)

        data = payload.model_dump_json(exclude_none=True)
        sent = failed = 0
        for subscription in subscriptions:
            try:
                await self._deliver(subscription, data)
                sent += 1
            except WebPushException as e:
                failed += 1
                status_code = getattr(e.response, "status_code", None)
                logger.warning(f"Push to subscription {subscription.id} failed: {status_code or e}")
                if status_code in GONE_STATUS_CODES:
                    await self.repos.push_subscriptions.deactivate(subscription)
            except Exception as e:
                failed += 1
                logger.warning(f"Push to subscription {subscription.id} failed: {e}")

        await self.repos.notification_history.create(
            NotificationHistory(
                user_id=user_id,
                type=payload.tag or "general",
                title=payload.title,
                body=payload.body,
                data=payload.data or None,
            )
        )
        return SendResult(success=sent > 0, sent=sent, failed=failed)

    async def send_bulk(self, user_ids: Iterable[str], payload: PushPayload) -> BulkSendResult:
        total = sent = failed = 0
        for user_id in user_ids:
            result = await self.send(user_id, payload)
            total += 1
            sent += result.sent
            failed += result.failed
        return BulkSendResult(total=total, sent=sent, failed=failed)

    async def mark_clicked(self, notification_id: int) -> Optional[NotificationHistory]:
        return await self.repos.notification_history.mark_clicked(notification_id)
