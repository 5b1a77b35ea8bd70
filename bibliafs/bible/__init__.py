"""
Bible text access.

``BibleApiClient`` talks to ABíbliaDigital; ``books`` and ``fallback`` hold
bundled data used when the upstream is unavailable; ``daily_verses`` holds the
curated verse-of-the-day list.
"""

from .client import BibleApiClient
from .errors import BibleApiError, BibleContentUnavailableError

__all__ = ["BibleApiClient", "BibleApiError", "BibleContentUnavailableError"]
