"""
Community feed repositories.

Like and comment counters on ``community_posts`` are adjusted in the same
commit as the row that changes them.
"""

from __future__ import annotations

from typing import List, Optional, Set, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.community import CommunityPost, PostComment, PostLike
from ..entities.users import User
from .base import UserOwnedRepository


class CommunityPostRepository(UserOwnedRepository[CommunityPost]):
    """Repository for community posts, likes and comments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CommunityPost)

    async def list_with_authors(self, limit: int = 50) -> List[Tuple[CommunityPost, Optional[User]]]:
        stmt = (
            select(CommunityPost, User)
            .join(User, User.id == CommunityPost.user_id, isouter=True)
            .order_by(CommunityPost.created_at.desc(), CommunityPost.id.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def liked_post_ids(self, user_id: str, post_ids: List[int]) -> Set[int]:
        if not post_ids:
            return set()
        stmt = select(PostLike.post_id).where(
            PostLike.user_id == user_id, PostLike.post_id.in_(post_ids)  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def delete_owned(self, entity_id: int, user_id: str) -> bool:
        if await self.get_owned(entity_id, user_id) is None:
            return False
        await self.session.execute(sa_delete(PostLike).where(PostLike.post_id == entity_id))
        await self.session.execute(sa_delete(PostComment).where(PostComment.post_id == entity_id))
        return await super().delete_owned(entity_id, user_id)

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    async def get_like(self, post_id: int, user_id: str) -> Optional[PostLike]:
        stmt = select(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def like(self, post: CommunityPost, user_id: str) -> CommunityPost:
        """Like a post once; repeated likes leave the counter unchanged."""
        if await self.get_like(post.id, user_id) is None:  # type: ignore[arg-type]
            self.session.add(PostLike(post_id=post.id, user_id=user_id))  # type: ignore[arg-type]
            post.like_count = (post.like_count or 0) + 1
            return await self.update(post)
        return post

    async def unlike(self, post: CommunityPost, user_id: str) -> CommunityPost:
        existing = await self.get_like(post.id, user_id)  # type: ignore[arg-type]
        if existing is not None:
            await self.session.delete(existing)
            post.like_count = max(0, (post.like_count or 0) - 1)
            return await self.update(post)
        return post

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def add_comment(self, post: CommunityPost, user_id: str, content: str) -> PostComment:
        comment = PostComment(post_id=post.id, user_id=user_id, content=content)  # type: ignore[arg-type]
        post.comment_count = (post.comment_count or 0) + 1
        self.session.add(post)
        self.session.add(comment)
        await self.session.commit()
        await self.session.refresh(comment)
        return comment

    async def list_comments(self, post_id: int) -> List[Tuple[PostComment, Optional[User]]]:
        stmt = (
            select(PostComment, User)
            .join(User, User.id == PostComment.user_id, isouter=True)
            .where(PostComment.post_id == post_id)
            .order_by(PostComment.created_at, PostComment.id)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]
