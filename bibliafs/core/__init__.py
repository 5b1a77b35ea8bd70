"""
Core utilities and configuration for BíbliaFS.

This package provides core functionality including logging configuration,
monitoring, database setup, and API I/O models.
"""

from bibliafs.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
