"""Read-side value objects."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class UserStats:
    """Todo counts for a single user."""

    user_id: UUID
    username: str
    total: int
    completed: int

    @property
    def pending(self) -> int:
        return self.total - self.completed
