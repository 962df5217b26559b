"""User repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.user import User


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        ...

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by exact username."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by exact email."""
        ...

    async def search_by_name(self, fragment: str) -> list[User]:
        """Case-insensitive substring search over display names."""
        ...

    async def get_page(self, offset: int, limit: int) -> list[User]:
        """Get one page of users."""
        ...

    async def count(self) -> int:
        """Count all users."""
        ...

    async def create(self, user: User) -> User:
        """Create a new user."""
        ...

    async def update(self, user: User) -> User:
        """Update an existing user."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a user and return success status."""
        ...
