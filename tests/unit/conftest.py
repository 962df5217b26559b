"""Shared fixtures for unit tests."""

from datetime import datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.todo import Todo
from domain.entities.user import User


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.todos = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def sample_user(user_id: UUID) -> User:
    """A persisted-looking user created a minute ago."""
    stamp = datetime.utcnow() - timedelta(minutes=1)
    return User(
        id=user_id,
        username="jdoe",
        email="jdoe@example.com",
        name="Jane Doe",
        created_at=stamp,
        updated_at=stamp,
    )


@pytest.fixture
def sample_todo(user_id: UUID) -> Todo:
    """A pending todo owned by sample_user."""
    stamp = datetime.utcnow() - timedelta(minutes=1)
    return Todo(
        user_id=user_id,
        title="Sample Task",
        description="Sample description",
        created_at=stamp,
        updated_at=stamp,
        owner_name="Jane Doe",
    )
