"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path

# Disable rate limiting and startup schema creation in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CREATE_SCHEMA"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.database.session import build_engine, create_schema
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a throwaway SQLite database with all tables for one test."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
async def client(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the test database.

    Service dependencies are overridden so every request runs against the
    per-test SQLite file instead of the configured database.
    """
    from api.v1.dependencies import get_todo_service, get_user_service
    from domain.services.stats_service import StatsService
    from domain.services.todo_service import TodoService
    from domain.services.user_service import UserService
    from main import create_app

    app = create_app()

    def override_get_user_service() -> UserService:
        return UserService(uow_factory, stats_service=StatsService(uow_factory))

    def override_get_todo_service() -> TodoService:
        return TodoService(uow_factory)

    app.dependency_overrides[get_user_service] = override_get_user_service
    app.dependency_overrides[get_todo_service] = override_get_todo_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
