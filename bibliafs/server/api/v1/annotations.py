"""
Bible Annotation Endpoints.

Bookmarks, highlights, notes and reader settings. Every row belongs to the
current user; deletes of rows that are missing or owned by someone else
answer 404.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from bibliafs.core.database.entities.study import BibleSettings, Bookmark, Highlight, Note
from bibliafs.core.models.io.bible import BibleSettingsUpdate, BookmarkCreate, HighlightCreate, NoteCreate
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import RepoBundleDep

router = APIRouter(tags=["annotations"])


def _not_found(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")


# =====================================================================
# Bookmarks
# =====================================================================


@router.get("/bible/bookmarks", response_model=List[Bookmark], summary="List Bookmarks")
async def list_bookmarks(user: CurrentUser, repos: RepoBundleDep) -> List[Bookmark]:
    return await repos.bookmarks.list_for_user(user.id)


@router.post(
    "/bible/bookmarks", response_model=Bookmark, status_code=status.HTTP_201_CREATED, summary="Create Bookmark"
)
async def create_bookmark(body: BookmarkCreate, user: CurrentUser, repos: RepoBundleDep) -> Bookmark:
    return await repos.bookmarks.create(Bookmark(user_id=user.id, **body.model_dump()))


@router.delete(
    "/bible/bookmarks/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Bookmark",
    responses={404: {"description": "Bookmark not found"}},
)
async def delete_bookmark(bookmark_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    if not await repos.bookmarks.delete_owned(bookmark_id, user.id):
        raise _not_found("Bookmark")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Highlights
# =====================================================================


@router.get("/bible/highlights", response_model=List[Highlight], summary="List Highlights")
async def list_highlights(user: CurrentUser, repos: RepoBundleDep) -> List[Highlight]:
    return await repos.highlights.list_for_user(user.id)


@router.post(
    "/bible/highlights", response_model=Highlight, status_code=status.HTTP_201_CREATED, summary="Create Highlight"
)
async def create_highlight(body: HighlightCreate, user: CurrentUser, repos: RepoBundleDep) -> Highlight:
    return await repos.highlights.create(Highlight(user_id=user.id, **body.model_dump()))


@router.delete(
    "/bible/highlights/{highlight_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Highlight",
    responses={404: {"description": "Highlight not found"}},
)
async def delete_highlight(highlight_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    if not await repos.highlights.delete_owned(highlight_id, user.id):
        raise _not_found("Highlight")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Notes
# =====================================================================


@router.get("/notes", response_model=List[Note], summary="List Notes")
async def list_notes(user: CurrentUser, repos: RepoBundleDep) -> List[Note]:
    return await repos.notes.list_for_user(user.id)


@router.post("/notes", response_model=Note, status_code=status.HTTP_201_CREATED, summary="Create Note")
async def create_note(body: NoteCreate, user: CurrentUser, repos: RepoBundleDep) -> Note:
    return await repos.notes.create(Note(user_id=user.id, **body.model_dump()))


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Note",
    responses={404: {"description": "Note not found"}},
)
async def delete_note(note_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    if not await repos.notes.delete_owned(note_id, user.id):
        raise _not_found("Note")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Reader settings
# =====================================================================


@router.get(
    "/bible/settings",
    response_model=BibleSettings,
    summary="Reader Settings",
    description="Stored reader settings, or the defaults when the user never saved any.",
)
async def get_bible_settings(user: CurrentUser, repos: RepoBundleDep) -> BibleSettings:
    stored = await repos.bible_settings.get_for_user(user.id)
    return stored or BibleSettings(user_id=user.id)


@router.put("/bible/settings", response_model=BibleSettings, summary="Save Reader Settings")
async def put_bible_settings(body: BibleSettingsUpdate, user: CurrentUser, repos: RepoBundleDep) -> BibleSettings:
    return await repos.bible_settings.upsert(user.id, body.model_dump(exclude_unset=True))
