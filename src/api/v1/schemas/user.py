"""Pydantic schemas for User API."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, ConfigDict, EmailStr, Field

from api.v1.schemas.common import CamelModel, require_not_blank
from domain.entities.stats import UserStats
from domain.entities.user import User

Username = Annotated[
    str, Field(min_length=3, max_length=50), AfterValidator(require_not_blank)
]
DisplayName = Annotated[
    str, Field(min_length=1, max_length=100), AfterValidator(require_not_blank)
]


class UserCreate(CamelModel):
    """Schema for creating a User."""

    username: Username
    email: EmailStr
    name: DisplayName


class UserUpdate(CamelModel):
    """Schema for updating a User (all fields optional)."""

    username: Username | None = None
    email: EmailStr | None = None
    name: DisplayName | None = None


class UserResponse(CamelModel):
    """Schema for User response."""

    id: UUID
    username: str
    email: str
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserStatsResponse(CamelModel):
    """Schema for per-user todo statistics."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "userId": "123e4567-e89b-12d3-a456-426614174000",
                "username": "jdoe",
                "totalTodos": 3,
                "completedTodos": 2,
                "pendingTodos": 1,
            }
        },
    )

    user_id: UUID
    username: str
    total_todos: int
    completed_todos: int
    pending_todos: int

    @classmethod
    def from_entity(cls, stats: UserStats) -> "UserStatsResponse":
        return cls(
            user_id=stats.user_id,
            username=stats.username,
            total_todos=stats.total,
            completed_todos=stats.completed,
            pending_todos=stats.pending,
        )
