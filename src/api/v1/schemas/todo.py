"""Pydantic schemas for Todo API."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, ConfigDict, Field

from api.v1.schemas.common import CamelModel, require_not_blank, to_naive_utc
from domain.entities.todo import Todo

Title = Annotated[
    str, Field(min_length=1, max_length=200), AfterValidator(require_not_blank)
]
Description = Annotated[str, Field(max_length=1000)]
DueDate = Annotated[datetime, AfterValidator(to_naive_utc)]


class TodoCreate(CamelModel):
    """Schema for creating a Todo."""

    title: Title
    description: Description | None = None
    completed: bool | None = None
    user_id: UUID
    due_date: DueDate | None = None


class TodoUpdate(CamelModel):
    """Schema for updating a Todo (all fields optional)."""

    title: Title | None = None
    description: Description | None = None
    completed: bool | None = None
    due_date: DueDate | None = None


class TodoResponse(CamelModel):
    """Schema for Todo response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Complete project documentation",
                "description": "Write comprehensive docs for the API",
                "completed": False,
                "userId": "456e4567-e89b-12d3-a456-426614174000",
                "userName": "Jane Doe",
                "dueDate": "2026-02-01T17:00:00",
                "createdAt": "2026-01-28T10:00:00",
                "updatedAt": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    title: str
    description: str | None
    completed: bool
    user_id: UUID | None
    user_name: str | None
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, todo: Todo) -> "TodoResponse":
        # Owner fields are only shown when the owner relation was resolved
        owner_loaded = todo.owner_name is not None
        return cls(
            id=todo.id,
            title=todo.title,
            description=todo.description,
            completed=todo.completed,
            user_id=todo.user_id if owner_loaded else None,
            user_name=todo.owner_name,
            due_date=todo.due_date,
            created_at=todo.created_at,
            updated_at=todo.updated_at,
        )


class DeleteCompletedResponse(CamelModel):
    """Schema for bulk deletion of completed todos."""

    message: str
    deleted_count: int
