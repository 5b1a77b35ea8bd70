"""Error types raised by the AI study assistant layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .quota import QuotaStatus


class AIUnavailableError(Exception):
    """Raised when no OpenAI key is configured."""

    def __init__(self, message: str = "AI assistant is not configured") -> None:
        super().__init__(message)


class AIQuotaExceededError(Exception):
    """Raised when a user has no AI requests left in the current period.

    Args:
        status: The quota status that denied the request.
    """

    def __init__(self, status: "QuotaStatus") -> None:
        super().__init__(status.message or "AI request limit reached")
        self.status = status
