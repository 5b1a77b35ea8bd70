"""
Community Feed Endpoints.

Members share verses with a short note; others like and comment. Likes are
idempotent and counters never go below zero.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from bibliafs.core.database.entities.community import CommunityPost
from bibliafs.core.database.entities.users import User
from bibliafs.core.models.io.community import AuthorInfo, CommentCreate, CommentRead, PostCreate, PostRead, PostUpdate
from bibliafs.server.auth import CurrentUser, OptionalUser
from bibliafs.server.services.deps import RepoBundleDep

router = APIRouter(prefix="/community/posts", tags=["community"])


def _author(user: Optional[User]) -> Optional[AuthorInfo]:
    if user is None:
        return None
    return AuthorInfo(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image_url=user.profile_image_url,
    )


def _post_read(post: CommunityPost, author: Optional[User], liked: bool = False) -> PostRead:
    return PostRead(**post.model_dump(), liked_by_me=liked, author=_author(author))


async def _get_post(post_id: int, repos) -> CommunityPost:
    post = await repos.posts.get_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.get(
    "",
    response_model=List[PostRead],
    summary="Community Feed",
    description="Newest posts with their author. ``liked_by_me`` is set for authenticated callers.",
)
async def list_posts(
    user: OptionalUser, repos: RepoBundleDep, limit: int = Query(default=50, ge=1, le=200)
) -> List[PostRead]:
    rows = await repos.posts.list_with_authors(limit)
    liked = set()
    if user is not None:
        liked = await repos.posts.liked_post_ids(user.id, [post.id for post, _ in rows])
    return [_post_read(post, author, post.id in liked) for post, author in rows]


@router.post(
    "",
    response_model=PostRead,
    status_code=status.HTTP_201_CREATED,
    summary="Share Verse",
    responses={400: {"description": "Verse reference or text missing"}},
)
async def create_post(body: PostCreate, user: CurrentUser, repos: RepoBundleDep) -> PostRead:
    if not body.verse_reference or not body.verse_text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="verse_reference and verse_text are required"
        )
    post = await repos.posts.create(
        CommunityPost(user_id=user.id, verse_reference=body.verse_reference, verse_text=body.verse_text, note=body.note)
    )
    return _post_read(post, user)


@router.patch(
    "/{post_id}",
    response_model=PostRead,
    summary="Edit Post Note",
    responses={404: {"description": "Post not found or not owned"}},
)
async def update_post(post_id: int, body: PostUpdate, user: CurrentUser, repos: RepoBundleDep) -> PostRead:
    post = await repos.posts.get_owned(post_id, user.id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    post.note = body.note
    return _post_read(await repos.posts.update(post), user)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Post",
    responses={404: {"description": "Post not found or not owned"}},
)
async def delete_post(post_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    if not await repos.posts.delete_owned(post_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/like", response_model=CommunityPost, summary="Like Post")
async def like_post(post_id: int, user: CurrentUser, repos: RepoBundleDep) -> CommunityPost:
    post = await _get_post(post_id, repos)
    return await repos.posts.like(post, user.id)


@router.delete("/{post_id}/like", response_model=CommunityPost, summary="Unlike Post")
async def unlike_post(post_id: int, user: CurrentUser, repos: RepoBundleDep) -> CommunityPost:
    post = await _get_post(post_id, repos)
    return await repos.posts.unlike(post, user.id)


@router.post(
    "/{post_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on Post",
    responses={400: {"description": "Empty comment"}, 404: {"description": "Post not found"}},
)
async def add_comment(post_id: int, body: CommentCreate, user: CurrentUser, repos: RepoBundleDep) -> CommentRead:
    content = (body.content or "").strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment content is required")
    post = await _get_post(post_id, repos)
    comment = await repos.posts.add_comment(post, user.id, content)
    return CommentRead(**comment.model_dump(), author=_author(user))


@router.get("/{post_id}/comments", response_model=List[CommentRead], summary="Post Comments")
async def list_comments(post_id: int, repos: RepoBundleDep) -> List[CommentRead]:
    rows = await repos.posts.list_comments(post_id)
    return [CommentRead(**comment.model_dump(), author=_author(author)) for comment, author in rows]
