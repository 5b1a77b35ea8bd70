"""AI study assistant and per-plan request quota."""

from .assistant import LessonContent, SearchHit, SearchResult, StudyAssistant
from .errors import AIQuotaExceededError, AIUnavailableError
from .quota import AI_PLAN_LIMITS, AIQuotaService, QuotaStatus

__all__ = [
    "AI_PLAN_LIMITS",
    "AIQuotaExceededError",
    "AIQuotaService",
    "AIUnavailableError",
    "LessonContent",
    "QuotaStatus",
    "SearchHit",
    "SearchResult",
    "StudyAssistant",
]
