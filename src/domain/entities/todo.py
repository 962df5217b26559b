"""Todo domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID, uuid4


@dataclass
class Todo:
    """Domain entity for a Todo owned by a User."""

    user_id: UUID
    title: str
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    completed: bool = False
    due_date: datetime | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    # Resolved from the owner relationship when loaded from storage
    owner_name: str | None = None

    def toggle(self) -> None:
        """Flip the completion flag."""
        self.completed = not self.completed
        self.touch()

    def touch(self) -> None:
        """Refresh updated_at, always moving it forward."""
        now = datetime.utcnow()
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
