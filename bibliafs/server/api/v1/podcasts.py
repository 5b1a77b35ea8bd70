"""
Podcast Endpoints.

Static paths (``/podcasts/my``, ``/podcasts/subscriptions``,
``/podcasts/subscribe``) are registered before ``/podcasts/{podcast_id}``.
Only a podcast's creator may edit it or publish episodes.
"""

import uuid
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Response, status

from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.podcasts import Podcast, PodcastSubscription
from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.podcasts import EpisodeCreate, PodcastCreate, PodcastSubscribeRequest, PodcastUpdate
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import RepoBundleDep

logger = get_logger(__name__)
router = APIRouter(prefix="/podcasts", tags=["podcasts"])


async def _get_podcast(podcast_id: int, repos) -> Podcast:
    podcast = await repos.podcasts.get_by_id(podcast_id)
    if podcast is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Podcast not found")
    return podcast


async def _get_created_podcast(podcast_id: int, user_id: str, repos) -> Podcast:
    podcast = await _get_podcast(podcast_id, repos)
    if podcast.created_by != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the creator can change this podcast")
    return podcast


@router.get(
    "",
    response_model=List[Podcast],
    summary="List Podcasts",
    description="Active podcasts, most subscribed first.",
)
async def list_podcasts(repos: RepoBundleDep) -> List[Podcast]:
    return await repos.podcasts.list_active()


@router.get("/my", response_model=List[Podcast], summary="My Podcasts")
async def my_podcasts(user: CurrentUser, repos: RepoBundleDep) -> List[Podcast]:
    return await repos.podcasts.list_by_creator(user.id)


@router.get(
    "/subscriptions",
    summary="My Subscriptions",
    description="Subscriptions with their podcast, newest first.",
)
async def my_subscriptions(user: CurrentUser, repos: RepoBundleDep) -> List[Dict[str, Any]]:
    rows = await repos.podcast_subscriptions.list_with_podcasts(user.id)
    return [{**subscription.model_dump(), "podcast": podcast.model_dump()} for subscription, podcast in rows]


@router.post(
    "/subscribe",
    response_model=PodcastSubscription,
    summary="Subscribe",
    description="Subscribing twice keeps the first subscription and counts it once.",
    responses={404: {"description": "Podcast not found"}},
)
async def subscribe(body: PodcastSubscribeRequest, user: CurrentUser, repos: RepoBundleDep) -> PodcastSubscription:
    podcast = await _get_podcast(body.podcast_id, repos)
    return await repos.podcast_subscriptions.subscribe(user.id, podcast)


@router.delete(
    "/subscribe/{podcast_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unsubscribe",
    responses={404: {"description": "Not subscribed"}},
)
async def unsubscribe(podcast_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    if not await repos.podcast_subscriptions.unsubscribe(user.id, podcast_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscription not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "",
    response_model=Podcast,
    status_code=status.HTTP_201_CREATED,
    summary="Create Podcast",
    responses={400: {"description": "RSS URL already registered"}},
)
async def create_podcast(body: PodcastCreate, user: CurrentUser, repos: RepoBundleDep) -> Podcast:
    if body.rss_url and await repos.podcasts.get_by_rss_url(body.rss_url) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Podcast with this RSS URL already exists")
    podcast = await repos.podcasts.create(Podcast(created_by=user.id, **body.model_dump()))
    logger.info(f"Podcast {podcast.id} created by {user.id}")
    return podcast


@router.get(
    "/{podcast_id}",
    response_model=Podcast,
    summary="Get Podcast",
    responses={404: {"description": "Podcast not found"}},
)
async def get_podcast(podcast_id: int, repos: RepoBundleDep) -> Podcast:
    return await _get_podcast(podcast_id, repos)


@router.patch(
    "/{podcast_id}",
    response_model=Podcast,
    summary="Update Podcast",
    responses={403: {"description": "Not the creator"}, 404: {"description": "Podcast not found"}},
)
async def update_podcast(podcast_id: int, body: PodcastUpdate, user: CurrentUser, repos: RepoBundleDep) -> Podcast:
    podcast = await _get_created_podcast(podcast_id, user.id, repos)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(podcast, field, value)
    return await repos.podcasts.update(podcast)


@router.delete(
    "/{podcast_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Podcast",
    responses={403: {"description": "Not the creator"}, 404: {"description": "Podcast not found"}},
)
async def delete_podcast(podcast_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    await _get_created_podcast(podcast_id, user.id, repos)
    await repos.podcasts.delete(podcast_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{podcast_id}/episodes",
    response_model=Podcast,
    status_code=status.HTTP_201_CREATED,
    summary="Publish Episode",
    responses={403: {"description": "Not the creator"}, 404: {"description": "Podcast not found"}},
)
async def add_episode(podcast_id: int, body: EpisodeCreate, user: CurrentUser, repos: RepoBundleDep) -> Podcast:
    podcast = await _get_created_podcast(podcast_id, user.id, repos)
    episode = {
        "id": uuid.uuid4().hex,
        "title": body.title,
        "description": body.description,
        "audio_url": body.audio_url,
        "duration": body.duration,
        "published_at": (body.published_at or utc_now()).isoformat(),
    }
    podcast.episodes = [*podcast.episodes, episode]
    return await repos.podcasts.update(podcast)
