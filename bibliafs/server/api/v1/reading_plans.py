"""
Reading Plan Endpoints.

Templates are seeded on first read. A user plan keeps its own copy of the
schedule; completing a day advances ``current_day`` to the first open day and
runs the reading reward.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Response, status

from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.reading_plans import ReadingPlan, ReadingPlanTemplate
from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.reading_plans import (
    CompleteDayRequest,
    CustomReadingPlanCreate,
    ReadingPlanCreate,
    ReadingPlanFromTemplate,
    ReadingPlanUpdate,
)
from bibliafs.gamification import ensure_plan_templates
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import GamificationDep, RepoBundleDep

logger = get_logger(__name__)
router = APIRouter(tags=["reading-plans"])


def _open_schedule(schedule: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{**day, "is_completed": False} for day in schedule]


async def _owned_plan(plan_id: int, user_id: str, repos) -> ReadingPlan:
    plan = await repos.reading_plans.get_owned(plan_id, user_id)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reading plan not found")
    return plan


# =====================================================================
# Templates
# =====================================================================


@router.get(
    "/reading-plan-templates",
    response_model=List[ReadingPlanTemplate],
    summary="List Plan Templates",
    description="Built-in reading plan templates. The catalogue is seeded on first access.",
)
async def list_templates(repos: RepoBundleDep) -> List[ReadingPlanTemplate]:
    return await ensure_plan_templates(repos.plan_templates)


@router.get(
    "/reading-plan-templates/{template_id}",
    response_model=ReadingPlanTemplate,
    summary="Get Plan Template",
    responses={404: {"description": "Template not found"}},
)
async def get_template(template_id: int, repos: RepoBundleDep) -> ReadingPlanTemplate:
    template = await repos.plan_templates.get_by_id(template_id)
    if template is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template


# =====================================================================
# User plans
# =====================================================================


@router.get("/reading-plans", response_model=List[ReadingPlan], summary="List Reading Plans")
async def list_plans(user: CurrentUser, repos: RepoBundleDep) -> List[ReadingPlan]:
    return await repos.reading_plans.list_for_user(user.id)


@router.get(
    "/reading-plans/current",
    response_model=Optional[ReadingPlan],
    summary="Current Reading Plan",
    description="The newest plan that is not completed, or null.",
)
async def current_plan(user: CurrentUser, repos: RepoBundleDep) -> Optional[ReadingPlan]:
    return await repos.reading_plans.get_current(user.id)


@router.post(
    "/reading-plans",
    response_model=ReadingPlan,
    status_code=status.HTTP_201_CREATED,
    summary="Create Reading Plan",
    description="Manual plan with ``total_days`` empty days.",
)
async def create_plan(body: ReadingPlanCreate, user: CurrentUser, repos: RepoBundleDep) -> ReadingPlan:
    schedule = [{"day": day, "readings": [], "is_completed": False} for day in range(1, body.total_days + 1)]
    plan = ReadingPlan(
        user_id=user.id,
        title=body.title,
        description=body.description,
        total_days=body.total_days,
        schedule=schedule,
    )
    return await repos.reading_plans.create(plan)


@router.post(
    "/reading-plans/from-template",
    response_model=ReadingPlan,
    status_code=status.HTTP_201_CREATED,
    summary="Start Plan From Template",
    responses={404: {"description": "Template not found"}},
)
async def create_from_template(body: ReadingPlanFromTemplate, user: CurrentUser, repos: RepoBundleDep) -> ReadingPlan:
    template = await repos.plan_templates.get_by_id(body.template_id)
    if template is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    plan = ReadingPlan(
        user_id=user.id,
        template_id=template.id,
        title=template.name,
        description=template.description,
        plan_type="template",
        total_days=template.duration,
        schedule=_open_schedule(template.schedule),
    )
    created = await repos.reading_plans.create(plan)
    logger.info(f"User {user.id} started plan {created.id} from template {template.id}")
    return created


@router.post(
    "/reading-plans/custom",
    response_model=ReadingPlan,
    status_code=status.HTTP_201_CREATED,
    summary="Create Custom Plan",
    description="One day per chapter from ``start_chapter`` to ``end_chapter`` of a single book.",
    responses={400: {"description": "Missing fields or an inverted chapter range"}},
)
async def create_custom_plan(body: CustomReadingPlanCreate, user: CurrentUser, repos: RepoBundleDep) -> ReadingPlan:
    if not body.book or body.start_chapter is None or body.end_chapter is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="book, start_chapter and end_chapter are required"
        )
    if body.start_chapter < 1 or body.end_chapter < body.start_chapter:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid chapter range")

    schedule = [
        {
            "day": index,
            "readings": [{"book": body.book, "chapter": chapter, "verses": body.verses or ""}],
            "is_completed": False,
        }
        for index, chapter in enumerate(range(body.start_chapter, body.end_chapter + 1), start=1)
    ]
    plan = ReadingPlan(
        user_id=user.id,
        title=body.title or f"{body.book} {body.start_chapter}-{body.end_chapter}",
        plan_type="custom",
        total_days=len(schedule),
        schedule=schedule,
    )
    return await repos.reading_plans.create(plan)


@router.patch("/reading-plans/{plan_id}", response_model=ReadingPlan, summary="Update Reading Plan")
async def update_plan(plan_id: int, body: ReadingPlanUpdate, user: CurrentUser, repos: RepoBundleDep) -> ReadingPlan:
    plan = await _owned_plan(plan_id, user.id, repos)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(plan, field, value)
    return await repos.reading_plans.update(plan)


@router.delete(
    "/reading-plans/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Reading Plan",
    responses={404: {"description": "Reading plan not found"}},
)
async def delete_plan(plan_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    if not await repos.reading_plans.delete_owned(plan_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reading plan not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/reading-plans/{plan_id}/complete-day",
    response_model=ReadingPlan,
    summary="Complete Plan Day",
    description=(
        "Mark one day as read, advance to the first open day and grant the daily reading reward. "
        "Finishing the last open day completes the plan."
    ),
    responses={400: {"description": "Day is not an integer"}, 404: {"description": "Unknown plan or day"}},
)
async def complete_day(
    plan_id: int,
    body: CompleteDayRequest,
    user: CurrentUser,
    repos: RepoBundleDep,
    gamification: GamificationDep,
) -> ReadingPlan:
    if not isinstance(body.day, int) or isinstance(body.day, bool):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid day")

    plan = await _owned_plan(plan_id, user.id, repos)
    schedule = [dict(day) for day in plan.schedule]
    target = next((day for day in schedule if day.get("day") == body.day), None)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Day not found in plan")

    target["is_completed"] = True
    plan.schedule = schedule
    first_open = next((day["day"] for day in schedule if not day.get("is_completed")), None)
    if first_open is None:
        plan.current_day = plan.total_days
        plan.is_completed = True
        plan.completed_at = utc_now()
    else:
        plan.current_day = first_open
    plan = await repos.reading_plans.update(plan)

    reward = await gamification.award_reading(user.id)
    logger.debug(f"Plan {plan.id} day {body.day} completed, xp gained {reward.xp_gained}")
    return plan
