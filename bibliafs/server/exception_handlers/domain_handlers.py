"""
Handlers mapping domain exceptions to HTTP responses.

| Exception                 | Status |
|---------------------------|--------|
| AIQuotaExceededError      | 429    |
| AIUnavailableError        | 503    |
| PaymentsUnavailableError  | 503    |
| BibleApiError             | 503    |
| GroupAccessError          | 403    |
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from bibliafs.ai.errors import AIQuotaExceededError, AIUnavailableError
from bibliafs.bible.errors import BibleApiError
from bibliafs.core.logging_config import get_logger
from bibliafs.groups.access import GroupAccessError
from bibliafs.payments.errors import PaymentsUnavailableError

logger = get_logger(__name__)


async def ai_quota_exceeded_handler(request: Request, exc: AIQuotaExceededError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": str(exc), "remaining": exc.status.remaining, "limit_reached": True},
    )


async def ai_unavailable_handler(request: Request, exc: AIUnavailableError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


async def payments_unavailable_handler(request: Request, exc: PaymentsUnavailableError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


async def bible_api_error_handler(request: Request, exc: BibleApiError) -> JSONResponse:
    logger.warning(f"Bible API failure on {request.url.path}: {exc}", extra={"upstream_status": exc.status_code})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc), "upstream_status": exc.status_code},
    )


async def group_access_handler(request: Request, exc: GroupAccessError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
