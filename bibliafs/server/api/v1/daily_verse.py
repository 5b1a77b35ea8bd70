"""
Verse of the Day Endpoints.
"""

from datetime import datetime, timezone
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, HTTPException, status

from bibliafs.bible.books import book_name
from bibliafs.bible.daily_verses import curated_for_day
from bibliafs.core.database.entities.daily_verses import DailyVerse
from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.bible import DailyVerseCreate, DailyVerseRead
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import RepoBundleDep

logger = get_logger(__name__)
router = APIRouter(tags=["daily-verse"])

DEFAULT_TZ = "America/Sao_Paulo"


def day_of_year_in(tz_name: str, now: datetime | None = None) -> int:
    """Day of the year in ``tz_name``; unknown zones count in UTC."""
    now = now or datetime.now(timezone.utc)
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug(f"Unknown timezone {tz_name!r}, using UTC")
        zone = ZoneInfo("UTC")
    return now.astimezone(zone).timetuple().tm_yday


def _read_model(verse: DailyVerse) -> DailyVerseRead:
    return DailyVerseRead(
        id=verse.id,
        reference=f"{book_name(verse.book)} {verse.chapter}:{verse.verse}",
        text=verse.text,
        version=verse.version,
        theme=verse.theme,
        day_of_year=verse.day_of_year,
    )


@router.get(
    "/daily-verse",
    response_model=DailyVerseRead,
    summary="Verse of the Day",
    description="The stored verse for today in ``tz``; the curated rotation fills days without one.",
)
async def get_daily_verse(repos: RepoBundleDep, tz: str = DEFAULT_TZ) -> DailyVerseRead:
    day = day_of_year_in(tz)
    verse = await repos.daily_verses.get_by_day(day)
    if verse is None:
        curated = curated_for_day(day)
        verse = await repos.daily_verses.create(
            DailyVerse(
                day_of_year=day,
                book=curated.book,
                chapter=curated.chapter,
                verse=curated.verse,
                text=curated.text,
                version=curated.version,
                theme=curated.theme,
            )
        )
        logger.info(f"Daily verse for day {day} assigned from curated list")
    return _read_model(verse)


@router.post(
    "/daily-verse",
    response_model=DailyVerse,
    status_code=status.HTTP_201_CREATED,
    summary="Assign Daily Verse",
    responses={409: {"description": "Day already has a verse"}},
)
async def create_daily_verse(body: DailyVerseCreate, user: CurrentUser, repos: RepoBundleDep) -> DailyVerse:
    if await repos.daily_verses.get_by_day(body.day_of_year) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Day already has a verse")
    return await repos.daily_verses.create(DailyVerse(**body.model_dump()))


@router.get("/daily-verses/all", response_model=List[DailyVerse], summary="List Daily Verses")
async def list_daily_verses(user: CurrentUser, repos: RepoBundleDep) -> List[DailyVerse]:
    return await repos.daily_verses.list()
