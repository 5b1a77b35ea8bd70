"""
Group Discussion Endpoints.

Leaders and moderators pose a question (optionally drafted by the assistant),
members answer, staff review the answers, and the leader can ask the
assistant for a synthesis of everything that was said.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, status

from bibliafs.ai import AIUnavailableError
from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.groups import (
    DiscussionStatus,
    GroupAnswer,
    GroupDiscussion,
    ReviewStatus,
)
from bibliafs.core.database.entities.users import User
from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.groups import AnswerCreate, AnswerReview, DiscussionCreate
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import GroupPolicyDep, QuotaServiceDep, RepoBundleDep, StudyAssistantDep

from .groups import STAFF_ROLES, get_group_or_404, require_member, require_role

logger = get_logger(__name__)
router = APIRouter(tags=["discussions"])

REVIEW_STATUSES = (ReviewStatus.EXCELLENT.value, ReviewStatus.APPROVED.value, ReviewStatus.NEEDS_REVIEW.value)


def answer_view(answer: GroupAnswer, author: Optional[User]) -> Dict[str, Any]:
    """Serialize an answer, hiding who wrote it when it is anonymous."""
    data = answer.model_dump()
    if answer.is_anonymous:
        data["user_id"] = None
        data["user_name"] = None
    else:
        data["user_name"] = author.display_name if author is not None else None
    return data


async def _get_discussion(discussion_id: int, repos) -> GroupDiscussion:
    discussion = await repos.discussions.get_by_id(discussion_id)
    if discussion is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Discussion not found")
    return discussion


@router.get("/groups/{group_id}/discussions", response_model=List[GroupDiscussion], summary="Group Discussions")
async def list_discussions(group_id: int, user: CurrentUser, repos: RepoBundleDep) -> List[GroupDiscussion]:
    await require_member(group_id, user.id, repos)
    return await repos.discussions.list_for_group(group_id)


@router.get(
    "/discussions/{discussion_id}",
    summary="Get Discussion",
    description="The discussion with its answers. Anonymous answers carry no author.",
    responses={403: {"description": "Not a member"}, 404: {"description": "Discussion not found"}},
)
async def get_discussion(discussion_id: int, user: CurrentUser, repos: RepoBundleDep) -> Dict[str, Any]:
    discussion = await _get_discussion(discussion_id, repos)
    await require_member(discussion.group_id, user.id, repos)
    rows = await repos.answers.list_with_users(discussion_id)
    return {**discussion.model_dump(), "answers": [answer_view(answer, author) for answer, author in rows]}


@router.post(
    "/groups/{group_id}/discussions",
    response_model=GroupDiscussion,
    status_code=status.HTTP_201_CREATED,
    summary="Start Discussion",
    description=(
        "Leaders and moderators only. With ``use_ai`` the assistant drafts the question when AI is available; "
        "a failed draft falls back to the question in the body."
    ),
    responses={
        400: {"description": "Title or question missing"},
        403: {"description": "Not staff or trial expired"},
        429: {"description": "AI quota exhausted"},
    },
)
async def create_discussion(
    group_id: int,
    body: DiscussionCreate,
    user: CurrentUser,
    repos: RepoBundleDep,
    policy: GroupPolicyDep,
    assistant: StudyAssistantDep,
    quota: QuotaServiceDep,
) -> GroupDiscussion:
    await get_group_or_404(group_id, repos)
    await require_role(group_id, user.id, repos, STAFF_ROLES)
    await policy.ensure_trial_active(user)
    if not body.title or not body.title.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")

    question = (body.question or "").strip()
    if body.use_ai and assistant.is_configured:
        quota.ensure_allowed(user)
        try:
            generated = await assistant.generate_discussion_question(
                user.id,
                title=body.title,
                description=body.description,
                verse_reference=body.verse_reference,
                verse_text=body.verse_text,
            )
            question = generated or question
            await quota.consume(user)
        except Exception as e:
            logger.warning(f"Discussion question generation failed for group {group_id}: {e}", exc_info=True)
    if not question:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Question is required")

    discussion = GroupDiscussion(
        group_id=group_id,
        created_by_id=user.id,
        title=body.title.strip(),
        description=body.description,
        question=question,
        verse_reference=body.verse_reference,
        verse_text=body.verse_text,
        allow_anonymous=body.allow_anonymous,
    )
    return await repos.discussions.create(discussion)


@router.post(
    "/discussions/{discussion_id}/answers",
    status_code=status.HTTP_201_CREATED,
    summary="Answer Discussion",
    responses={
        400: {"description": "Discussion closed or empty answer"},
        403: {"description": "Not a member"},
        404: {"description": "Discussion not found"},
    },
)
async def create_answer(
    discussion_id: int, body: AnswerCreate, user: CurrentUser, repos: RepoBundleDep
) -> Dict[str, Any]:
    discussion = await _get_discussion(discussion_id, repos)
    if discussion.status == DiscussionStatus.CLOSED.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="This discussion is closed")
    await require_member(discussion.group_id, user.id, repos)
    content = (body.content or "").strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Answer content is required")

    answer = await repos.answers.create(
        GroupAnswer(
            discussion_id=discussion_id,
            user_id=user.id,
            content=content,
            verse_reference=body.verse_reference,
            is_anonymous=body.is_anonymous and discussion.allow_anonymous,
        )
    )
    return answer_view(answer, user)


@router.patch(
    "/answers/{answer_id}/review",
    summary="Review Answer",
    responses={
        400: {"description": "Invalid status"},
        403: {"description": "Not the group leader or a moderator"},
        404: {"description": "Answer not found"},
    },
)
async def review_answer(answer_id: int, body: AnswerReview, user: CurrentUser, repos: RepoBundleDep) -> Dict[str, Any]:
    if body.status not in REVIEW_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Status must be excellent, approved or needs_review"
        )
    answer = await repos.answers.get_by_id(answer_id)
    if answer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Answer not found")
    discussion = await _get_discussion(answer.discussion_id, repos)
    await require_role(discussion.group_id, user.id, repos, STAFF_ROLES)

    answer.review_status = body.status
    answer.review_comment = body.comment
    answer.reviewed_by = user.id
    answer.reviewed_at = utc_now()
    answer = await repos.answers.update(answer)
    return answer_view(answer, None)


@router.post(
    "/discussions/{discussion_id}/synthesize",
    summary="Synthesize Answers",
    description="Leader only. Summarises the answers with the assistant and stores the synthesis.",
    responses={
        400: {"description": "No answers yet"},
        403: {"description": "Not the leader"},
        429: {"description": "AI quota exhausted"},
        503: {"description": "AI not configured"},
    },
)
async def synthesize_discussion(
    discussion_id: int,
    user: CurrentUser,
    repos: RepoBundleDep,
    assistant: StudyAssistantDep,
    quota: QuotaServiceDep,
) -> Dict[str, Any]:
    discussion = await _get_discussion(discussion_id, repos)
    group = await get_group_or_404(discussion.group_id, repos)
    if group.leader_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the leader can synthesize answers")
    if not assistant.is_configured:
        raise AIUnavailableError()
    quota.ensure_allowed(user)

    rows = await repos.answers.list_with_users(discussion_id)
    if not rows:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="There are no answers to synthesize")
    answers = [
        {
            "content": answer.content,
            "is_anonymous": answer.is_anonymous,
            "author_name": author.display_name if author is not None else None,
            "verse_reference": answer.verse_reference,
        }
        for answer, author in rows
    ]

    synthesis = await assistant.synthesize_answers(
        user.id,
        title=discussion.title,
        question=discussion.question,
        answers=answers,
        verse_reference=discussion.verse_reference,
        verse_text=discussion.verse_text,
    )
    await quota.consume(user)

    discussion.ai_synthesis = synthesis
    discussion.synthesized_at = utc_now()
    discussion = await repos.discussions.update(discussion)
    logger.info(f"Discussion {discussion_id} synthesized from {len(answers)} answers")
    return {"synthesis": synthesis, "discussion": discussion.model_dump()}


@router.patch(
    "/discussions/{discussion_id}/close",
    response_model=GroupDiscussion,
    summary="Close Discussion",
    responses={403: {"description": "Not staff"}, 404: {"description": "Discussion not found"}},
)
async def close_discussion(discussion_id: int, user: CurrentUser, repos: RepoBundleDep) -> GroupDiscussion:
    discussion = await _get_discussion(discussion_id, repos)
    await require_role(discussion.group_id, user.id, repos, STAFF_ROLES)
    discussion.status = DiscussionStatus.CLOSED.value
    return await repos.discussions.update(discussion)
