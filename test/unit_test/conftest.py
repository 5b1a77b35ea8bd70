"""Shared fixtures for unit tests.

Every test gets its own in-memory SQLite database with all tables created,
a session bound to it and a ``RepoBundle`` built on that session.
"""

from __future__ import annotations

from typing import AsyncGenerator, Awaitable, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from bibliafs.core.database.entities.users import User
from bibliafs.core.database.repositories.bundle import RepoBundle, build_repos
from bibliafs.core.database.utils import create_all, create_sessionmaker

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

UserFactory = Callable[..., Awaitable[User]]


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(in_memory_engine):
    return create_sessionmaker(in_memory_engine)


@pytest.fixture(scope="function")
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
def repos(session: AsyncSession) -> RepoBundle:
    return build_repos(session)


@pytest.fixture(scope="function")
def make_user(repos: RepoBundle) -> UserFactory:
    """Factory persisting a user; keyword arguments override the defaults."""
    counter = {"n": 0}

    async def _make(user_id: str | None = None, **fields) -> User:
        counter["n"] += 1
        user_id = user_id or f"user-{counter['n']}"
        fields.setdefault("email", f"{user_id}@example.com")
        fields.setdefault("first_name", "Maria")
        return await repos.users.create(User(id=user_id, **fields))

    return _make
