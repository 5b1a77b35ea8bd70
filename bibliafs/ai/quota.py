"""
AI request quota per subscription plan.

| Plan            | Limit | Resets  |
|-----------------|-------|---------|
| free            | 20    | never   |
| monthly         | 500   | monthly |
| yearly / annual | 3750  | yearly  |
| premium_plus    | 7200  | yearly  |

Unknown plans are treated as free. Usage counts against the period that ends
at ``users.ai_requests_reset_at``; once that moment passes the count is treated
as zero and the next consumed request opens a new period.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel

from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.users import User
from bibliafs.core.database.repositories.users import UserRepository

from .errors import AIQuotaExceededError

logger = logging.getLogger(__name__)

WARNING_RATIO = 0.75


class ResetPeriod(str, Enum):
    NEVER = "never"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class PlanLimit:
    limit: int
    reset_period: ResetPeriod


AI_PLAN_LIMITS: Dict[str, PlanLimit] = {
    "free": PlanLimit(20, ResetPeriod.NEVER),
    "monthly": PlanLimit(500, ResetPeriod.MONTHLY),
    "yearly": PlanLimit(3750, ResetPeriod.YEARLY),
    "annual": PlanLimit(3750, ResetPeriod.YEARLY),
    "premium_plus": PlanLimit(7200, ResetPeriod.YEARLY),
}


class QuotaStatus(BaseModel):
    allowed: bool
    remaining: int
    limit: int
    plan: str
    message: Optional[str] = None


def plan_limit(plan: Optional[str]) -> PlanLimit:
    return AI_PLAN_LIMITS.get(plan or "free", AI_PLAN_LIMITS["free"])


def add_months(moment: datetime, months: int) -> datetime:
    """Shift ``moment`` by whole months, clamping the day to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _exhausted_message(plan: str, limit: int) -> str:
    if plan == "monthly":
        return f"Você usou todas as {limit} perguntas do mês. O limite será renovado no próximo mês."
    if plan in ("yearly", "annual"):
        return f"Você usou todas as {limit} perguntas do ano. O limite será renovado no próximo período."
    if plan == "premium_plus":
        return f"Você usou todas as {limit} perguntas do ano. Entre em contato para um plano customizado."
    return f"Você esgotou suas {limit} perguntas gratuitas. Para continuar usando a IA, assine um de nossos planos."


class AIQuotaService:
    """Checks and consumes AI requests against the user's plan."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    def used_requests(self, user: User, now: Optional[datetime] = None) -> int:
        now = now or utc_now()
        config = plan_limit(user.subscription_plan)
        reset_at = user.ai_requests_reset_at
        if config.reset_period is not ResetPeriod.NEVER and reset_at is not None and now >= reset_at:
            return 0
        return user.ai_requests_count or 0

    def check(self, user: User, now: Optional[datetime] = None) -> QuotaStatus:
        """Report whether ``user`` may make another AI request."""
        plan = user.subscription_plan if user.subscription_plan in AI_PLAN_LIMITS else "free"
        config = plan_limit(plan)
        used = self.used_requests(user, now)
        remaining = max(0, config.limit - used)

        if used >= config.limit:
            return QuotaStatus(
                allowed=False, remaining=0, limit=config.limit, plan=plan, message=_exhausted_message(plan, config.limit)
            )

        message = None
        if used >= int(config.limit * WARNING_RATIO) and remaining > 0:
            if plan == "free":
                message = f"Atenção: Você tem apenas {remaining} perguntas restantes. Assine um plano para continuar usando a IA."
            else:
                message = f"Atenção: Você tem {remaining} perguntas restantes no período atual."
        return QuotaStatus(allowed=True, remaining=remaining, limit=config.limit, plan=plan, message=message)

    def ensure_allowed(self, user: User) -> QuotaStatus:
        """Return the quota status, raising when the user has nothing left.

        Raises:
            AIQuotaExceededError: If the quota is exhausted
        """
        status = self.check(user)
        if not status.allowed:
            logger.info(f"AI quota exhausted for user {user.id} on plan {status.plan}")
            raise AIQuotaExceededError(status)
        return status

    async def consume(self, user: User, now: Optional[datetime] = None) -> QuotaStatus:
        """Count one AI request and return the updated status."""
        now = now or utc_now()
        config = plan_limit(user.subscription_plan)
        reset_at = user.ai_requests_reset_at
        if config.reset_period is not ResetPeriod.NEVER and (reset_at is None or now >= reset_at):
            months = 1 if config.reset_period is ResetPeriod.MONTHLY else 12
            user.ai_requests_count = 1
            user.ai_requests_reset_at = add_months(now, months)
        else:
            user.ai_requests_count = (user.ai_requests_count or 0) + 1
        await self.users.update(user)
        return self.check(user, now)
