"""
Bible Text Endpoints.

Proxies ABíbliaDigital through ``BibleApiClient``. Chapter reads fall back to
bundled chapters; upstream failures without a fallback answer 503 through the
registered ``BibleApiError`` handler.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, status

from bibliafs.bible import BibleApiError
from bibliafs.bible.books import find_book
from bibliafs.core.logging_config import get_logger
from bibliafs.server.services.deps import BibleClientDep

logger = get_logger(__name__)
router = APIRouter(prefix="/bible", tags=["bible"])

DEFAULT_COMPARE_VERSIONS = "nvi,acf,ra"


@router.get(
    "/books",
    summary="List Books",
    description="The 66 books with abbreviations, chapter counts and testament. Served from the bundled catalogue when the upstream is down.",
)
async def list_books(bible: BibleClientDep) -> List[Dict[str, Any]]:
    return await bible.list_books()


@router.get(
    "/book-info/{abbrev}",
    summary="Book Info",
    description="Catalogue entry for a book, looked up by abbreviation or name.",
    responses={404: {"description": "Unknown book"}},
)
async def book_info(abbrev: str) -> Dict[str, Any]:
    book = find_book(abbrev)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return book


@router.get(
    "/search",
    summary="Text Search",
    description="Full-text verse search in one translation.",
    responses={400: {"description": "Query missing"}, 503: {"description": "Bible API unavailable"}},
)
async def search(bible: BibleClientDep, query: Optional[str] = None, version: str = "nvi") -> Any:
    if not query or not query.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Query is required")
    return await bible.search(version, query.strip())


@router.get(
    "/compare/{abbrev}/{chapter}",
    summary="Compare Translations",
    description="Fetch one chapter in several translations. Translations that cannot be loaded are left out.",
)
async def compare_versions(
    abbrev: str, chapter: int, bible: BibleClientDep, versions: str = DEFAULT_COMPARE_VERSIONS
) -> Dict[str, Any]:
    """
    Compare a chapter across translations.

    - **versions**: Comma separated translation codes, e.g. ``nvi,acf``.
    """
    chapters: Dict[str, Any] = {}
    for version in [v.strip() for v in versions.split(",") if v.strip()]:
        try:
            chapters[version] = await bible.get_chapter(version, abbrev, chapter)
        except BibleApiError as e:
            logger.info(f"Omitting {version} from comparison of {abbrev} {chapter}: {e}")
    return {"book": abbrev, "chapter": chapter, "versions": chapters}


@router.get(
    "/{version}/{abbrev}/{chapter}",
    summary="Get Chapter",
    description="Verses of a chapter. Falls back to a bundled copy when the upstream fails.",
    responses={503: {"description": "Chapter unavailable"}},
)
async def get_chapter(version: str, abbrev: str, chapter: int, bible: BibleClientDep) -> Dict[str, Any]:
    return await bible.get_chapter(version, abbrev, chapter)


@router.get(
    "/{version}/{abbrev}/{chapter}/{verse}",
    summary="Get Verse",
    description="A single verse. There is no bundled fallback.",
    responses={503: {"description": "Verse unavailable"}},
)
async def get_verse(version: str, abbrev: str, chapter: int, verse: int, bible: BibleClientDep) -> Dict[str, Any]:
    return await bible.get_verse(version, abbrev, chapter, verse)
