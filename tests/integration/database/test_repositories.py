"""Integration tests for the SQLAlchemy repositories and Unit of Work."""

from collections.abc import Callable
from datetime import datetime

import pytest

from core.exceptions import EmailTakenError, UsernameTakenError
from domain.entities.todo import Todo
from domain.entities.user import User
from domain.services.user_service import UserService
from infrastructure.database.repositories.sqlalchemy_user_repo import (
    SQLAlchemyUserRepository,
)
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

UowFactory = Callable[[], SQLAlchemyUnitOfWork]


async def _add_user(uow_factory: UowFactory, username: str, name: str = "Someone") -> User:
    async with uow_factory() as uow:
        user = await uow.users.create(
            User(username=username, email=f"{username}@example.com", name=name)
        )
        await uow.commit()
        return user


async def _add_todo(
    uow_factory: UowFactory, user: User, title: str, completed: bool = False
) -> Todo:
    async with uow_factory() as uow:
        todo = await uow.todos.create(Todo(user_id=user.id, title=title, completed=completed))
        await uow.commit()
        return todo


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_lookups_are_exact(self, uow_factory: UowFactory) -> None:
        await _add_user(uow_factory, "jdoe")

        async with uow_factory() as uow:
            assert (await uow.users.get_by_username("jdoe")) is not None
            assert (await uow.users.get_by_username("JDOE")) is None
            assert (await uow.users.get_by_email("jdoe@example.com")) is not None

    @pytest.mark.asyncio
    async def test_search_escapes_wildcards(self, uow_factory: UowFactory) -> None:
        await _add_user(uow_factory, "pct", name="100% Real")
        await _add_user(uow_factory, "plain", name="1000 Real")

        async with uow_factory() as uow:
            found = await uow.users.search_by_name("0%")

        assert [u.username for u in found] == ["pct"]

    @pytest.mark.asyncio
    async def test_page_and_count(self, uow_factory: UowFactory) -> None:
        for i in range(3):
            await _add_user(uow_factory, f"user{i}")

        async with uow_factory() as uow:
            page = await uow.users.get_page(offset=2, limit=2)
            total = await uow.users.count()

        assert [u.username for u in page] == ["user2"]
        assert total == 3


class TestTodoRepository:
    @pytest.mark.asyncio
    async def test_owner_name_is_resolved(self, uow_factory: UowFactory) -> None:
        user = await _add_user(uow_factory, "jdoe", name="Jane Doe")
        created = await _add_todo(uow_factory, user, "Task")

        async with uow_factory() as uow:
            loaded = await uow.todos.get(created.id)

        assert created.owner_name == "Jane Doe"
        assert loaded is not None
        assert loaded.owner_name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_completion_counts(self, uow_factory: UowFactory) -> None:
        user = await _add_user(uow_factory, "jdoe")
        await _add_todo(uow_factory, user, "A", completed=True)
        await _add_todo(uow_factory, user, "B")

        async with uow_factory() as uow:
            assert await uow.todos.get_completion_counts(user.id) == (2, 1)

    @pytest.mark.asyncio
    async def test_delete_for_user_only_touches_that_user(
        self, uow_factory: UowFactory
    ) -> None:
        alice = await _add_user(uow_factory, "alice")
        bob = await _add_user(uow_factory, "bob")
        await _add_todo(uow_factory, alice, "A1", completed=True)
        await _add_todo(uow_factory, alice, "A2")
        await _add_todo(uow_factory, bob, "B1", completed=True)

        async with uow_factory() as uow:
            deleted = await uow.todos.delete_for_user(alice.id, completed=True)
            await uow.commit()

        async with uow_factory() as uow:
            remaining = await uow.todos.get_filtered()

        assert deleted == 1
        assert sorted(t.title for t in remaining) == ["A2", "B1"]

    @pytest.mark.asyncio
    async def test_foreign_key_cascade(self, uow_factory: UowFactory) -> None:
        """Removing a user row takes its todos with it at the storage level."""
        user = await _add_user(uow_factory, "jdoe")
        await _add_todo(uow_factory, user, "Task")

        async with uow_factory() as uow:
            assert await uow.users.delete(user.id)
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.todos.count() == 0


class TestUnitOfWork:
    @pytest.mark.asyncio
    async def test_uncommitted_work_is_discarded(self, uow_factory: UowFactory) -> None:
        async with uow_factory() as uow:
            await uow.users.create(User(username="ghost", email="g@example.com", name="G"))

        async with uow_factory() as uow:
            assert await uow.users.count() == 0

    @pytest.mark.asyncio
    async def test_repositories_require_context(self, uow_factory: UowFactory) -> None:
        uow = uow_factory()

        with pytest.raises(RuntimeError):
            _ = uow.users


class TestUniquenessRace:
    """The store rejects duplicates the pre-checks did not see."""

    @pytest.fixture
    def blind_prechecks(self, monkeypatch: pytest.MonkeyPatch) -> None:
        async def _none(self: SQLAlchemyUserRepository, value: str) -> None:
            return None

        monkeypatch.setattr(SQLAlchemyUserRepository, "get_by_username", _none)
        monkeypatch.setattr(SQLAlchemyUserRepository, "get_by_email", _none)

    @pytest.mark.asyncio
    async def test_duplicate_username_is_conflict(
        self, uow_factory: UowFactory, blind_prechecks: None
    ) -> None:
        service = UserService(uow_factory)
        await service.create("jdoe", "first@example.com", "First")

        with pytest.raises(UsernameTakenError):
            await service.create("jdoe", "second@example.com", "Second")

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(
        self, uow_factory: UowFactory, blind_prechecks: None
    ) -> None:
        service = UserService(uow_factory)
        await service.create("first", "shared@example.com", "First")

        with pytest.raises(EmailTakenError):
            await service.create("second", "shared@example.com", "Second")

        async with uow_factory() as uow:
            assert await uow.users.count() == 1


class TestTimestamps:
    @pytest.mark.asyncio
    async def test_round_trip_keeps_microseconds(self, uow_factory: UowFactory) -> None:
        stamp = datetime(2026, 1, 2, 3, 4, 5, 678901)
        async with uow_factory() as uow:
            await uow.users.create(
                User(
                    username="clock",
                    email="clock@example.com",
                    name="Clock",
                    created_at=stamp,
                    updated_at=stamp,
                )
            )
            await uow.commit()

        async with uow_factory() as uow:
            user = await uow.users.get_by_username("clock")

        assert user is not None
        assert user.created_at == stamp
