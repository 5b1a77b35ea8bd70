"""
Teacher Lesson Endpoints.

Lessons belong to the teacher who created them. Students submit answers and
receive a score computed against each question's ``correct_answer``. The AI
tools draft lesson content and answer teaching questions; both count against
the caller's AI quota.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Response, status

from bibliafs.ai import LessonContent
from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.lessons import Lesson, LessonProgress
from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.lessons import (
    GenerateLessonRequest,
    LessonCreate,
    LessonProgressSubmit,
    LessonUpdate,
    TeacherAssistantRequest,
)
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import QuotaServiceDep, RepoBundleDep, StudyAssistantDep

logger = get_logger(__name__)
router = APIRouter(prefix="/teacher", tags=["lessons"])


def score_answers(questions: List[Dict[str, Any]], answers: Dict[str, Any]) -> Optional[int]:
    """Percentage of questions answered with their ``correct_answer``; None without questions."""
    if not questions:
        return None
    correct = sum(
        1
        for index, question in enumerate(questions)
        if answers.get(str(question.get("id", index))) == question.get("correct_answer")
    )
    return round(correct * 100 / len(questions))


async def _owned_lesson(lesson_id: int, user_id: str, repos) -> Lesson:
    lesson = await repos.lessons.get_owned(lesson_id, user_id)
    if lesson is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")
    return lesson


# =====================================================================
# Lesson CRUD
# =====================================================================


@router.get("/lessons", response_model=List[Lesson], summary="My Lessons")
async def list_lessons(user: CurrentUser, repos: RepoBundleDep) -> List[Lesson]:
    return await repos.lessons.list_for_user(user.id)


@router.get(
    "/lessons/{lesson_id}",
    response_model=Lesson,
    summary="Get Lesson",
    responses={404: {"description": "Lesson not found"}},
)
async def get_lesson(lesson_id: int, user: CurrentUser, repos: RepoBundleDep) -> Lesson:
    lesson = await repos.lessons.get_by_id(lesson_id)
    if lesson is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")
    return lesson


@router.post("/lessons", response_model=Lesson, status_code=status.HTTP_201_CREATED, summary="Create Lesson")
async def create_lesson(body: LessonCreate, user: CurrentUser, repos: RepoBundleDep) -> Lesson:
    return await repos.lessons.create(Lesson(teacher_id=user.id, **body.model_dump()))


@router.patch(
    "/lessons/{lesson_id}",
    response_model=Lesson,
    summary="Update Lesson",
    responses={404: {"description": "Lesson not found or not owned"}},
)
async def update_lesson(lesson_id: int, body: LessonUpdate, user: CurrentUser, repos: RepoBundleDep) -> Lesson:
    lesson = await _owned_lesson(lesson_id, user.id, repos)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(lesson, field, value)
    return await repos.lessons.update(lesson)


@router.delete(
    "/lessons/{lesson_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Lesson",
    responses={404: {"description": "Lesson not found or not owned"}},
)
async def delete_lesson(lesson_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    if not await repos.lessons.delete_owned(lesson_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Student progress
# =====================================================================


@router.post(
    "/lessons/{lesson_id}/progress",
    response_model=LessonProgress,
    summary="Submit Lesson Progress",
    description="Store the student's answers and score. Submitting again replaces the previous attempt.",
    responses={404: {"description": "Lesson not found"}},
)
async def submit_progress(
    lesson_id: int, body: LessonProgressSubmit, user: CurrentUser, repos: RepoBundleDep
) -> LessonProgress:
    lesson = await repos.lessons.get_by_id(lesson_id)
    if lesson is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")

    progress = LessonProgress(
        lesson_id=lesson_id,
        student_id=user.id,
        answers=body.answers,
        is_completed=body.is_completed,
        score=score_answers(lesson.questions, body.answers),
        completed_at=utc_now() if body.is_completed else None,
    )
    return await repos.lesson_progress.upsert(progress)


@router.get(
    "/lessons/{lesson_id}/progress",
    response_model=List[LessonProgress],
    summary="Lesson Progress",
    description="All student attempts for a lesson. Only the lesson's teacher may read them.",
    responses={404: {"description": "Lesson not found or not owned"}},
)
async def lesson_progress(lesson_id: int, user: CurrentUser, repos: RepoBundleDep) -> List[LessonProgress]:
    await _owned_lesson(lesson_id, user.id, repos)
    return await repos.lesson_progress.list_for_lesson(lesson_id)


# =====================================================================
# AI tools
# =====================================================================


@router.post(
    "/generate-lesson-content",
    response_model=LessonContent,
    summary="Draft Lesson Content",
    description="Generate objectives, content blocks and review questions sized to the lesson duration.",
    responses={
        400: {"description": "Title or scripture base missing"},
        429: {"description": "AI quota exhausted"},
        503: {"description": "AI not configured"},
    },
)
async def generate_lesson_content(
    body: GenerateLessonRequest,
    user: CurrentUser,
    assistant: StudyAssistantDep,
    quota: QuotaServiceDep,
) -> LessonContent:
    if not body.title or not body.scripture_base:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title and scripture base are required")
    quota.ensure_allowed(user)
    content = await assistant.generate_lesson_content(
        user.id,
        title=body.title,
        scripture_base=body.scripture_base,
        duration=body.duration,
        num_questions=body.num_questions,
    )
    await quota.consume(user)
    return content


@router.post(
    "/ask-assistant",
    summary="Teaching Assistant",
    description="Free-form teaching help, optionally grounded on lesson context.",
    responses={
        400: {"description": "Question missing"},
        429: {"description": "AI quota exhausted"},
        503: {"description": "AI not configured"},
    },
)
async def ask_assistant(
    body: TeacherAssistantRequest,
    user: CurrentUser,
    assistant: StudyAssistantDep,
    quota: QuotaServiceDep,
) -> Dict[str, Any]:
    if not body.question or not body.question.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Question is required")
    quota.ensure_allowed(user)
    answer = await assistant.ask_teacher_assistant(user.id, body.question.strip(), body.context)
    status_after = await quota.consume(user)
    return {"answer": answer, "remaining": status_after.remaining}
