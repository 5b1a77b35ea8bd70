"""
Gamification: XP levels, reading streaks, achievements and the reward transaction.
"""

from .levels import LEVELS, level_for_xp, level_info, progress_to_next_level
from .seeds import ensure_achievements, ensure_plan_templates
from .service import GamificationService, RewardResult, UserNotFoundError
from .streaks import next_streak

__all__ = [
    "LEVELS",
    "GamificationService",
    "RewardResult",
    "UserNotFoundError",
    "ensure_achievements",
    "ensure_plan_templates",
    "level_for_xp",
    "level_info",
    "next_streak",
    "progress_to_next_level",
]
