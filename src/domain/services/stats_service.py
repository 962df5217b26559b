"""Per-user todo statistics."""

from collections.abc import Callable
from uuid import UUID

from core.exceptions import UserNotFoundError
from domain.entities.stats import UserStats
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork


class StatsService:
    """Read-side aggregation over a user's todos."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_user_stats(self, user_id: UUID) -> UserStats:
        """Get total/completed/pending counts for a user."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return await self.compute(uow, user)

    @staticmethod
    async def compute(uow: IUnitOfWork, user: User) -> UserStats:
        """Aggregate counts inside a caller-owned unit of work.

        Both counts come from one statement, so pending can never go negative.
        """
        total, completed = await uow.todos.get_completion_counts(user.id)
        return UserStats(
            user_id=user.id,
            username=user.username,
            total=total,
            completed=completed,
        )
