"""
Prayer Journal Endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.study import Prayer
from bibliafs.core.models.io.study import PrayerCreate, PrayerUpdate
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import RepoBundleDep

router = APIRouter(prefix="/prayers", tags=["prayers"])


@router.get("", response_model=List[Prayer], summary="List Prayers")
async def list_prayers(user: CurrentUser, repos: RepoBundleDep) -> List[Prayer]:
    return await repos.prayers.list_for_user(user.id)


@router.post("", response_model=Prayer, status_code=status.HTTP_201_CREATED, summary="Create Prayer")
async def create_prayer(body: PrayerCreate, user: CurrentUser, repos: RepoBundleDep) -> Prayer:
    return await repos.prayers.create(Prayer(user_id=user.id, **body.model_dump()))


@router.patch(
    "/{prayer_id}",
    response_model=Prayer,
    summary="Update Prayer",
    description="Marking a prayer as answered stamps ``answered_at``.",
    responses={404: {"description": "Prayer not found"}},
)
async def update_prayer(prayer_id: int, body: PrayerUpdate, user: CurrentUser, repos: RepoBundleDep) -> Prayer:
    prayer = await repos.prayers.get_owned(prayer_id, user.id)
    if prayer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prayer not found")

    changes = body.model_dump(exclude_unset=True)
    if changes.get("is_answered") and not prayer.is_answered:
        prayer.answered_at = utc_now()
    for field, value in changes.items():
        setattr(prayer, field, value)
    return await repos.prayers.update(prayer)


@router.delete(
    "/{prayer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Prayer",
    responses={404: {"description": "Prayer not found"}},
)
async def delete_prayer(prayer_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    if not await repos.prayers.delete_owned(prayer_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prayer not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
