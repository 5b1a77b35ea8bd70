"""Web push notifications and the reminder scheduler."""

from .push import PushNotificationService, PushPayload, SendResult, random_insight
from .scheduler import NotificationScheduler

__all__ = [
    "NotificationScheduler",
    "PushNotificationService",
    "PushPayload",
    "SendResult",
    "random_insight",
]
