"""
Audio Progress and Offline Content Endpoints.
"""

import json
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Response, status

from bibliafs.core.database.entities.media import AudioProgress, OfflineContent
from bibliafs.core.models.io.media import AudioProgressUpsert, OfflineContentUpsert
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import RepoBundleDep

router = APIRouter(tags=["media"])


def audio_completed(current_time: float, duration: float, explicit: Optional[bool] = None) -> bool:
    if explicit:
        return True
    return duration > 0 and current_time >= duration


# =====================================================================
# Audio progress
# =====================================================================


@router.get(
    "/audio/progress",
    response_model=List[AudioProgress],
    summary="Listening Progress",
    description="The user's chapter progress, most recently played first.",
)
async def list_audio_progress(user: CurrentUser, repos: RepoBundleDep) -> List[AudioProgress]:
    return await repos.audio_progress.list_for_user(user.id)


@router.get(
    "/audio/progress/{book}/{chapter}",
    response_model=Optional[AudioProgress],
    summary="Chapter Listening Progress",
)
async def get_audio_progress(
    book: str, chapter: int, user: CurrentUser, repos: RepoBundleDep, version: str = "nvi"
) -> Optional[AudioProgress]:
    return await repos.audio_progress.get_for_chapter(user.id, book, chapter, version)


@router.post(
    "/audio/progress",
    response_model=AudioProgress,
    summary="Save Listening Progress",
    description="One row per book, chapter and version. Reaching the end marks the chapter completed.",
)
async def save_audio_progress(body: AudioProgressUpsert, user: CurrentUser, repos: RepoBundleDep) -> AudioProgress:
    values = {
        "current_time": body.current_time,
        "duration": body.duration,
        "playback_speed": body.playback_speed,
        "is_completed": audio_completed(body.current_time, body.duration, body.is_completed),
    }
    return await repos.audio_progress.upsert(user.id, body.book, body.chapter, body.version, values)


# =====================================================================
# Offline content
# =====================================================================


@router.get("/offline/content", response_model=List[OfflineContent], summary="Downloaded Chapters")
async def list_offline_content(user: CurrentUser, repos: RepoBundleDep) -> List[OfflineContent]:
    return await repos.offline_content.list_for_user(user.id)


@router.post("/offline/content", response_model=OfflineContent, summary="Save Chapter Offline")
async def save_offline_content(body: OfflineContentUpsert, user: CurrentUser, repos: RepoBundleDep) -> OfflineContent:
    size = body.size_bytes
    if size is None:
        size = len(json.dumps(body.content, ensure_ascii=False).encode("utf-8"))
    return await repos.offline_content.upsert(user.id, body.book, body.chapter, body.version, body.content, size)


@router.delete(
    "/offline/content/{content_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Downloaded Chapter",
    responses={404: {"description": "Content not found"}},
)
async def delete_offline_content(content_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    if not await repos.offline_content.delete_owned(content_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/offline/content", status_code=status.HTTP_204_NO_CONTENT, summary="Remove All Downloads")
async def clear_offline_content(user: CurrentUser, repos: RepoBundleDep) -> Response:
    await repos.offline_content.delete_all_for_user(user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
