"""
Data access layer organized by business domain.

Every repository takes an ``AsyncSession``; ``build_repos`` wires them all to
one session for a request.
"""

from .base import BaseRepository, QueryBuilder, SQLModelRepository, UserOwnedRepository
from .bundle import RepoBundle, build_repos

__all__ = [
    "BaseRepository",
    "QueryBuilder",
    "RepoBundle",
    "SQLModelRepository",
    "UserOwnedRepository",
    "build_repos",
]
