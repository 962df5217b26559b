"""User service layer with business logic."""

from collections.abc import Callable
from datetime import datetime
from typing import Optional
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AppException,
    EmailTakenError,
    UsernameTakenError,
    UserNotFoundError,
)
from domain.entities.stats import UserStats
from domain.entities.user import EMAIL_CONSTRAINT, USERNAME_CONSTRAINT, User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.stats_service import StatsService

logger = structlog.get_logger()


def conflict_from_integrity_error(
    exc: IntegrityError, username: str, email: str
) -> AppException | None:
    """Translate a unique-constraint violation on users into a conflict.

    Returns None for anything that is not a username/email uniqueness failure.
    """
    orig = str(exc.orig) if exc.orig else str(exc)
    # Only the headline names the constraint; PostgreSQL puts the values in DETAIL
    headline = orig.splitlines()[0].lower() if orig else ""
    if "unique" not in headline and "duplicate" not in headline:
        return None
    if USERNAME_CONSTRAINT in headline or "users.username" in headline:
        return UsernameTakenError(username)
    if EMAIL_CONSTRAINT in headline or "users.email" in headline:
        return EmailTakenError(email)
    return None


class UserService:
    """Service layer for User business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        stats_service: Optional[StatsService] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._stats = stats_service or StatsService(uow_factory)

    async def get_by_id(self, user_id: UUID) -> User:
        """Get a user, raising if it does not exist."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    async def get_by_username(self, username: str) -> User:
        """Get a user by username, raising if it does not exist."""
        user = await self.find_by_username(username)
        if not user:
            raise UserNotFoundError(username=username)
        return user

    async def find_by_username(self, username: str) -> User | None:
        """Exact username lookup; None when absent."""
        async with self._uow_factory() as uow:
            return await uow.users.get_by_username(username)

    async def find_by_email(self, email: str) -> User | None:
        """Exact email lookup; None when absent."""
        async with self._uow_factory() as uow:
            return await uow.users.get_by_email(email)

    async def search_by_name(self, fragment: str) -> list[User]:
        """Case-insensitive substring search on display name."""
        async with self._uow_factory() as uow:
            return await uow.users.search_by_name(fragment)

    async def list_users(
        self, page: int, size: int, search: str | None = None
    ) -> tuple[list[User], int]:
        """List users with the total user count.

        A non-blank search returns every match; otherwise one page is returned.
        """
        async with self._uow_factory() as uow:
            if search is not None and search.strip():
                users = await uow.users.search_by_name(search)
            else:
                users = await uow.users.get_page(offset=page * size, limit=size)
            total = await uow.users.count()
            return users, total

    async def create(self, username: str, email: str, name: str) -> User:
        """Create a user with a unique username and email."""
        async with self._uow_factory() as uow:
            if await uow.users.get_by_username(username):
                raise UsernameTakenError(username)
            if await uow.users.get_by_email(email):
                raise EmailTakenError(email)

            now = datetime.utcnow()
            user = User(
                username=username,
                email=email,
                name=name,
                created_at=now,
                updated_at=now,
            )

            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                conflict = conflict_from_integrity_error(exc, username, email)
                if conflict is None:
                    raise
                logger.info("user_create_race_lost", username=username)
                raise conflict from exc

            logger.info("user_created", user_id=str(created.id), username=created.username)
            return created

    async def update(
        self,
        user_id: UUID,
        username: str | None = None,
        email: str | None = None,
        name: str | None = None,
    ) -> User:
        """Partially update a user. Only non-None fields change."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            if username is not None and username != user.username:
                existing = await uow.users.get_by_username(username)
                if existing and existing.id != user.id:
                    raise UsernameTakenError(username)
                user.username = username

            if email is not None and email != user.email:
                existing = await uow.users.get_by_email(email)
                if existing and existing.id != user.id:
                    raise EmailTakenError(email)
                user.email = email

            if name is not None:
                user.name = name

            user.touch()

            try:
                updated = await uow.users.update(user)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                conflict = conflict_from_integrity_error(exc, user.username, user.email)
                if conflict is None:
                    raise
                raise conflict from exc

            return updated

    async def delete(self, user_id: UUID) -> None:
        """Delete a user together with every todo it owns."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            removed = await uow.todos.delete_for_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

            logger.info("user_deleted", user_id=str(user_id), todos_removed=removed)

    async def get_stats(self, user_id: UUID) -> UserStats:
        """Get todo counts for a user."""
        return await self._stats.get_user_stats(user_id)
