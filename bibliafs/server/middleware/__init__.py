"""
Middleware modules for the BíbliaFS server.
"""

from .request_monitoring import RequestMonitoringMiddleware

__all__ = ["RequestMonitoringMiddleware"]
