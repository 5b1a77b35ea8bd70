"""
Reminder scheduler.

A single asyncio task wakes every ``interval`` seconds, walks every
notification preference row and sends the reading, prayer and daily verse
reminders whose ``HH:MM`` time matches the user's local clock (within one
minute). Each (user, reminder type, local date) fires at most once; the
record of what was sent lives in memory only.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Set, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bibliafs.core.database.repositories.bundle import RepoBundle, build_repos

from .push import PushNotificationService, PushPayload, random_insight

logger = logging.getLogger(__name__)

SentKey = Tuple[str, str, str]


@dataclass(frozen=True)
class Reminder:
    type: str
    enabled_field: str
    time_field: str


REMINDERS = (
    Reminder("reading", "reading_reminders", "reading_reminder_time"),
    Reminder("prayer", "prayer_reminders", "prayer_reminder_time"),
    Reminder("daily-verse", "daily_verse_notification", "daily_verse_time"),
)


def build_reminder_payload(reminder_type: str) -> PushPayload:
    if reminder_type == "reading":
        return PushPayload(
            title="Hora da Leitura Bíblica",
            body=random_insight("reading"),
            icon="/icons/bible-icon.png",
            tag="reading-reminder",
            data={"type": "reading", "url": "/bible"},
            actions=[{"action": "open", "title": "Ler Agora"}, {"action": "dismiss", "title": "Depois"}],
        )
    if reminder_type == "prayer":
        return PushPayload(
            title="Momento de Oração",
            body=random_insight("prayer"),
            icon="/icons/prayer-icon.png",
            tag="prayer-reminder",
            data={"type": "prayer", "url": "/prayers"},
            actions=[{"action": "open", "title": "Orar Agora"}, {"action": "dismiss", "title": "Depois"}],
        )
    return PushPayload(
        title="Versículo do Dia",
        body="Um novo versículo inspirador está esperando por você!",
        icon="/icons/verse-icon.png",
        tag="daily-verse",
        data={"type": "daily-verse", "url": "/"},
        actions=[{"action": "open", "title": "Ver Versículo"}],
    )


def local_time(now: datetime, tz_name: Optional[str]) -> datetime:
    """Convert ``now`` to ``tz_name``; unknown zones use the server's local zone."""
    try:
        return now.astimezone(ZoneInfo(tz_name or "America/Sao_Paulo"))
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug(f"Unknown timezone {tz_name!r}, using server local time")
        return now.astimezone()


def parse_hh_mm(value: str) -> Optional[Tuple[int, int]]:
    try:
        hour, minute = value.split(":")
        return int(hour), int(minute)
    except (AttributeError, ValueError):
        return None


def is_due(preference_time: str, local: datetime, weekend_only: bool) -> bool:
    if weekend_only and local.weekday() not in (5, 6):
        return False
    parsed = parse_hh_mm(preference_time)
    if parsed is None:
        return False
    hour, minute = parsed
    return local.hour == hour and abs(local.minute - minute) <= 1


class NotificationScheduler:
    """Background task that delivers time-of-day reminders."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        push_service_factory: Callable[[RepoBundle], PushNotificationService],
        interval: float = 60.0,
    ) -> None:
        self._session_factory = session_factory
        self._push_service_factory = push_service_factory
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
        self._sent: Set[SentKey] = set()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            logger.info("Notification scheduler already running")
            return
        self._task = asyncio.create_task(self._loop(), name="notification-scheduler")
        logger.info(f"Notification scheduler started, checking every {self.interval:.0f}s")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Notification scheduler stopped")

    async def _loop(self) -> None:
        while True:
            try:
                await self.check_and_send()
            except Exception as e:
                logger.error(f"Notification scheduler check failed: {e}", exc_info=True)
            await asyncio.sleep(self.interval)

    def _mark_sent(self, key: SentKey) -> None:
        user_id, _, local_date = key
        self._sent = {k for k in self._sent if k[0] != user_id or k[2] == local_date}
        self._sent.add(key)

    async def _check_user(
        self, preference: Dict[str, Any], service: PushNotificationService, now: datetime
    ) -> int:
        user_id = preference["user_id"]
        local = local_time(now, preference["timezone"])
        local_date = local.date().isoformat()
        sent = 0
        for reminder in REMINDERS:
            if not preference[reminder.enabled_field]:
                continue
            if not is_due(preference[reminder.time_field], local, preference["weekend_only"]):
                continue
            key = (user_id, reminder.type, local_date)
            if key in self._sent:
                continue
            self._mark_sent(key)
            await service.send(user_id, build_reminder_payload(reminder.type))
            logger.info(f"Sent {reminder.type} reminder to user {user_id}")
            sent += 1
        return sent

    async def check_and_send(self, now: Optional[datetime] = None) -> int:
        """Send every reminder that is due at ``now``.

        Returns:
            How many reminders were sent
        """
        now = now or datetime.now(timezone.utc)
        total = 0
        async with self._session_factory() as session:
            repos = build_repos(session)
            service = self._push_service_factory(repos)
            # Snapshot rows so a rollback for one user does not expire the rest.
            preferences = [row.model_dump() for row in await repos.notification_preferences.list_all()]
            for preference in preferences:
                try:
                    total += await self._check_user(preference, service, now)
                except Exception as e:
                    await session.rollback()
                    logger.error(
                        f"Failed to send reminders to user {preference['user_id']}: {e}",
                        exc_info=True,
                        extra={"user_id": preference["user_id"]},
                    )
        return total
