"""
Push Notification Endpoints.

Browser subscriptions, reminder preferences and click tracking. Reminder
times are ``HH:MM`` in the user's own IANA timezone.
"""

import re
from typing import Any, Dict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, HTTPException, Request, status

from bibliafs.core.database.entities.notifications import NotificationPreference
from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.notifications import (
    NotificationClicked,
    NotificationPreferencesUpdate,
    PushSubscribeRequest,
    PushUnsubscribeRequest,
)
from bibliafs.notifications import PushPayload, random_insight
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import PushServiceDep

logger = get_logger(__name__)
router = APIRouter(prefix="/notifications", tags=["notifications"])

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
TIME_FIELDS = ("reading_reminder_time", "prayer_reminder_time", "daily_verse_time")


def is_valid_timezone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


@router.get(
    "/vapid-key",
    summary="VAPID Public Key",
    responses={503: {"description": "Push notifications not configured"}},
)
async def vapid_key(push: PushServiceDep) -> Dict[str, str]:
    if not push.vapid_public_key:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Push notifications not configured")
    return {"public_key": push.vapid_public_key}


@router.post(
    "/subscribe",
    status_code=status.HTTP_201_CREATED,
    summary="Register Push Subscription",
    responses={400: {"description": "Incomplete subscription"}},
)
async def subscribe(
    body: PushSubscribeRequest, request: Request, user: CurrentUser, push: PushServiceDep
) -> Dict[str, Any]:
    if not body.endpoint or body.keys is None or not body.keys.p256dh or not body.keys.auth:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid subscription")
    subscription = await push.save_subscription(
        user.id,
        body.endpoint,
        body.keys.p256dh,
        body.keys.auth,
        request.headers.get("user-agent"),
    )
    logger.info(f"Push subscription {subscription.id} saved for user {user.id}")
    return {"success": True, "id": subscription.id}


@router.post(
    "/unsubscribe",
    summary="Remove Push Subscription",
    responses={400: {"description": "Endpoint missing"}},
)
async def unsubscribe(body: PushUnsubscribeRequest, user: CurrentUser, push: PushServiceDep) -> Dict[str, Any]:
    if not body.endpoint:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Endpoint is required")
    removed = await push.remove_subscription(user.id, body.endpoint)
    return {"success": removed}


@router.get("/preferences", response_model=NotificationPreference, summary="Reminder Preferences")
async def get_preferences(user: CurrentUser, push: PushServiceDep) -> NotificationPreference:
    return await push.get_preferences(user.id)


@router.patch(
    "/preferences",
    response_model=NotificationPreference,
    summary="Update Reminder Preferences",
    responses={400: {"description": "Invalid time or timezone"}},
)
async def update_preferences(
    body: NotificationPreferencesUpdate, user: CurrentUser, push: PushServiceDep
) -> NotificationPreference:
    patch = body.model_dump(exclude_unset=True)
    for field in TIME_FIELDS:
        value = patch.get(field)
        if value is not None and not TIME_PATTERN.match(value):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} must be HH:MM")
    timezone_name = patch.get("timezone")
    if timezone_name is not None and not is_valid_timezone(timezone_name):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid timezone")
    return await push.update_preferences(user.id, patch)


@router.post(
    "/clicked",
    summary="Track Notification Click",
    responses={404: {"description": "Notification not found"}},
)
async def notification_clicked(body: NotificationClicked, user: CurrentUser, push: PushServiceDep) -> Dict[str, Any]:
    if await push.mark_clicked(body.notification_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return {"success": True}


@router.post(
    "/test",
    summary="Send Test Notification",
    description="Send a reading insight to every active subscription of the caller.",
)
async def send_test(user: CurrentUser, push: PushServiceDep) -> Dict[str, Any]:
    result = await push.send(
        user.id,
        PushPayload(
            title="Notificação de teste",
            body=random_insight("reading"),
            tag="test",
            data={"url": "/"},
        ),
    )
    return {"success": result.success, "sent": result.sent, "failed": result.failed}
