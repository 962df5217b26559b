"""Todo service layer with business logic."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import OwnerNotFoundError, TodoNotFoundError, UserNotFoundError
from domain.entities.todo import Todo
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class TodoService:
    """Service layer for Todo business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_by_id(self, todo_id: UUID) -> Todo:
        """Get a specific todo."""
        async with self._uow_factory() as uow:
            todo = await uow.todos.get(todo_id)
            if not todo:
                raise TodoNotFoundError(str(todo_id))
            return todo

    async def list_todos(
        self,
        page: int,
        size: int,
        user_id: UUID | None = None,
        completed: bool | None = None,
    ) -> tuple[list[Todo], int]:
        """List todos plus the total number of todos.

        With a user and/or completion filter every match is returned and
        page/size are ignored; without filters one page is returned.
        """
        async with self._uow_factory() as uow:
            if user_id is not None or completed is not None:
                todos = await uow.todos.get_filtered(user_id=user_id, completed=completed)
                logger.debug(
                    "todo_list_unpaginated",
                    user_id=str(user_id) if user_id else None,
                    completed=completed,
                    returned=len(todos),
                )
            else:
                todos = await uow.todos.get_page(offset=page * size, limit=size)
            total = await uow.todos.count()
            return todos, total

    async def list_for_user(self, user_id: UUID, completed: bool | None = None) -> list[Todo]:
        """Get all todos owned by a user, optionally by completion state."""
        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise UserNotFoundError(str(user_id))
            return await uow.todos.get_filtered(user_id=user_id, completed=completed)

    async def create(
        self,
        user_id: UUID,
        title: str,
        description: str | None = None,
        completed: bool | None = None,
        due_date: datetime | None = None,
    ) -> Todo:
        """Create a todo for an existing user."""
        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise OwnerNotFoundError(str(user_id))

            now = datetime.utcnow()
            todo = Todo(
                user_id=user_id,
                title=title,
                description=description,
                completed=completed if completed is not None else False,
                due_date=due_date,
                created_at=now,
                updated_at=now,
            )

            created = await uow.todos.create(todo)
            await uow.commit()

            logger.info("todo_created", todo_id=str(created.id), user_id=str(user_id))
            return created

    async def update(
        self,
        todo_id: UUID,
        title: str | None = None,
        description: str | None = None,
        completed: bool | None = None,
        due_date: datetime | None = None,
    ) -> Todo:
        """Partially update a todo. Only non-None fields change."""
        async with self._uow_factory() as uow:
            todo = await uow.todos.get(todo_id)
            if not todo:
                raise TodoNotFoundError(str(todo_id))

            if title is not None:
                todo.title = title
            if description is not None:
                todo.description = description
            if completed is not None:
                todo.completed = completed
            if due_date is not None:
                todo.due_date = due_date

            todo.touch()

            updated = await uow.todos.update(todo)
            await uow.commit()
            return updated

    async def toggle(self, todo_id: UUID) -> Todo:
        """Flip a todo's completion state."""
        async with self._uow_factory() as uow:
            todo = await uow.todos.get(todo_id)
            if not todo:
                raise TodoNotFoundError(str(todo_id))

            todo.toggle()

            updated = await uow.todos.update(todo)
            await uow.commit()
            return updated

    async def delete(self, todo_id: UUID) -> None:
        """Delete a todo."""
        async with self._uow_factory() as uow:
            deleted = await uow.todos.delete(todo_id)
            if not deleted:
                raise TodoNotFoundError(str(todo_id))
            await uow.commit()

    async def delete_completed_for_user(self, user_id: UUID) -> int:
        """Delete every completed todo owned by a user. Returns how many went."""
        async with self._uow_factory() as uow:
            if not await uow.users.get(user_id):
                raise UserNotFoundError(str(user_id))

            deleted = await uow.todos.delete_for_user(user_id, completed=True)
            await uow.commit()

            logger.info("completed_todos_purged", user_id=str(user_id), deleted_count=deleted)
            return deleted
