"""Todo repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.todo import Todo


class ITodoRepository(Protocol):
    """Repository interface for Todo entities."""

    async def get(self, id: UUID) -> Todo | None:
        """Get a todo by ID."""
        ...

    async def get_page(self, offset: int, limit: int) -> list[Todo]:
        """Get one page of all todos."""
        ...

    async def get_filtered(
        self, user_id: UUID | None = None, completed: bool | None = None
    ) -> list[Todo]:
        """Get every todo matching the given filters (AND-ed, unsliced)."""
        ...

    async def count(self) -> int:
        """Count all todos."""
        ...

    async def get_completion_counts(self, user_id: UUID) -> tuple[int, int]:
        """Get (total, completed) todo counts for a user in a single query."""
        ...

    async def create(self, todo: Todo) -> Todo:
        """Create a new todo."""
        ...

    async def update(self, todo: Todo) -> Todo:
        """Update an existing todo."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a todo and return success status."""
        ...

    async def delete_for_user(self, user_id: UUID, completed: bool | None = None) -> int:
        """Bulk delete a user's todos, optionally by completion. Returns rows removed."""
        ...
