"""
Health Check Endpoints.

This module provides basic system status endpoints (health, app version)
used for monitoring and by the mobile shells to decide whether to update.
"""

from fastapi import APIRouter

from bibliafs import __version__
from bibliafs.server.core import constant

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check():
    """
    Health check endpoint.

    Returns a simple status indicator to confirm the server is running and reachable.
    """
    return {"status": "ok"}


@router.get(
    f"{constant.API_PREFIX}/app/version",
    summary="Get App Version",
    description="Current server version and the oldest client version still supported.",
    response_description="Version object.",
)
async def app_version():
    return {"version": __version__, "min_supported_version": constant.MIN_SUPPORTED_APP_VERSION}
