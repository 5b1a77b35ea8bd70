"""
Bundled chapters served when the upstream Bible API is unavailable.

The chapters live in ``data/fallback_chapters.json`` keyed by
``"{version}-{abbrev}-{chapter}"``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Optional


@lru_cache(maxsize=1)
def _load_chapters() -> Dict[str, Dict[str, Any]]:
    data = resources.files("bibliafs.bible").joinpath("data/fallback_chapters.json").read_text(encoding="utf-8")
    return json.loads(data)


def fallback_key(version: str, abbrev: str, chapter: int) -> str:
    return f"{version.lower()}-{abbrev.lower()}-{chapter}"


def get_fallback_chapter(version: str, abbrev: str, chapter: int) -> Optional[Dict[str, Any]]:
    """Return the bundled chapter payload, or None when it is not bundled."""
    return _load_chapters().get(fallback_key(version, abbrev, chapter))
