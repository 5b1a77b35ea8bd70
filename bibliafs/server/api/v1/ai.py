"""
AI Study Endpoints.

Both routes check the caller's AI quota before calling the model and count
the request only after the model answered.
"""

from fastapi import APIRouter, HTTPException, status

from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.ai import AISearchRequest, AISearchResponse, StudyAnswer, StudyQuestion
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import QuotaServiceDep, StudyAssistantDep

logger = get_logger(__name__)
router = APIRouter(tags=["ai"])

MIN_SEARCH_QUERY_LENGTH = 3


@router.post(
    "/ai/study",
    response_model=StudyAnswer,
    summary="Ask the Study Assistant",
    description="Answer a question about the passage being read, with the chapter as context.",
    responses={
        400: {"description": "Question missing"},
        429: {"description": "AI quota exhausted"},
        503: {"description": "AI not configured"},
    },
)
async def study_question(
    body: StudyQuestion,
    user: CurrentUser,
    assistant: StudyAssistantDep,
    quota: QuotaServiceDep,
) -> StudyAnswer:
    if not body.question or not body.question.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Question is required")
    quota.ensure_allowed(user)

    answer = await assistant.answer_question(
        user.id,
        body.question.strip(),
        book=body.book,
        chapter=body.chapter,
        verse=body.verse,
        verse_text=body.verse_text,
        chapter_verses=body.chapter_verses,
    )
    after = await quota.consume(user)
    return StudyAnswer(answer=answer, remaining=after.remaining, warning=after.message)


@router.post(
    "/bible/ai-search",
    response_model=AISearchResponse,
    summary="Semantic Bible Search",
    description="Find passages by meaning rather than wording.",
    responses={
        400: {"description": "Query shorter than 3 characters"},
        429: {"description": "AI quota exhausted"},
        503: {"description": "AI not configured"},
    },
)
async def ai_search(
    body: AISearchRequest,
    user: CurrentUser,
    assistant: StudyAssistantDep,
    quota: QuotaServiceDep,
) -> AISearchResponse:
    query = (body.query or "").strip()
    if len(query) < MIN_SEARCH_QUERY_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Query must have at least {MIN_SEARCH_QUERY_LENGTH} characters",
        )
    quota.ensure_allowed(user)

    result = await assistant.semantic_search(user.id, query)
    await quota.consume(user)
    logger.debug(f"AI search for {user.id} returned {len(result.results)} results")
    return AISearchResponse(query=query, summary=result.summary, results=result.results)
