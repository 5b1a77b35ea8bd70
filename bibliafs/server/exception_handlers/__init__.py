"""
Exception handlers for the BíbliaFS server.

This package contains custom exception handlers for domain error types and a
catch-all handler, plus a setup function to register them with the FastAPI
application.
"""

from fastapi import FastAPI

from bibliafs.ai.errors import AIQuotaExceededError, AIUnavailableError
from bibliafs.bible.errors import BibleApiError
from bibliafs.core.logging_config import get_logger
from bibliafs.groups.access import GroupAccessError
from bibliafs.payments.errors import PaymentsUnavailableError

from .domain_handlers import (
    ai_quota_exceeded_handler,
    ai_unavailable_handler,
    bible_api_error_handler,
    group_access_handler,
    payments_unavailable_handler,
)
from .global_handler import global_exception_handler

logger = get_logger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(AIQuotaExceededError, ai_quota_exceeded_handler)
    app.add_exception_handler(AIUnavailableError, ai_unavailable_handler)
    app.add_exception_handler(PaymentsUnavailableError, payments_unavailable_handler)
    app.add_exception_handler(BibleApiError, bible_api_error_handler)
    app.add_exception_handler(GroupAccessError, group_access_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")


__all__ = ["global_exception_handler", "setup_exception_handlers"]
