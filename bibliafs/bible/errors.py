"""Error types specific to the Bible text layer.

Purpose:
- Provide typed exceptions thrown by ``BibleApiClient``.
- Expose HTTP-oriented context (status code, error body, retryability) for
  diagnosis and for the client's retry policy.

Usage:
- Catch ``BibleApiError`` for general upstream failures.
- Catch ``BibleContentUnavailableError`` when neither the upstream API nor the
  bundled fallback can serve a chapter.
"""

from __future__ import annotations

from typing import Any, Optional


class BibleApiError(Exception):
    """Base error for Bible text API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional structured payload from the server (e.g., JSON body).
        retryable: Whether the failure may succeed on a later attempt.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details
        self.retryable = retryable


class BibleContentUnavailableError(BibleApiError):
    """Raised when a chapter is unavailable upstream and has no bundled fallback.

    Args:
        version: Translation code.
        abbrev: Book abbreviation.
        chapter: Chapter number.
    """

    def __init__(self, version: str, abbrev: str, chapter: int, *, cause: Optional[BibleApiError] = None) -> None:
        super().__init__(
            f"Chapter not available: {version}-{abbrev}-{chapter}",
            status_code=cause.status_code if cause else None,
            details=cause.details if cause else None,
        )
        self.version = version
        self.abbrev = abbrev
        self.chapter = chapter
