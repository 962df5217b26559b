"""SQLAlchemy implementation of Todo repository."""

from uuid import UUID

from sqlalchemy import case, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.todo import Todo
from infrastructure.database.models import TodoModel


class SQLAlchemyTodoRepository:
    """SQLAlchemy implementation of ITodoRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Todo | None:
        """Get a todo by ID."""
        stmt = select(TodoModel).where(TodoModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_page(self, offset: int, limit: int) -> list[Todo]:
        """Get one page of all todos."""
        stmt = (
            select(TodoModel)
            .order_by(TodoModel.created_at, TodoModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_filtered(
        self, user_id: UUID | None = None, completed: bool | None = None
    ) -> list[Todo]:
        """Get every todo matching the given filters."""
        stmt = select(TodoModel)
        if user_id is not None:
            stmt = stmt.where(TodoModel.user_id == user_id)
        if completed is not None:
            stmt = stmt.where(TodoModel.completed == completed)
        stmt = stmt.order_by(TodoModel.created_at, TodoModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count(self) -> int:
        """Count all todos."""
        result = await self._session.execute(select(func.count()).select_from(TodoModel))
        return int(result.scalar_one())

    async def get_completion_counts(self, user_id: UUID) -> tuple[int, int]:
        """Get (total, completed) counts for a user in a single query."""
        stmt = select(
            func.count().label("total"),
            func.sum(
                case((TodoModel.completed == True, 1), else_=0)  # noqa: E712
            ).label("completed"),
        ).where(TodoModel.user_id == user_id)
        row = (await self._session.execute(stmt)).one()
        return int(row.total or 0), int(row.completed or 0)

    async def create(self, todo: Todo) -> Todo:
        """Create a new todo."""
        model = self._to_model(todo)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model, attribute_names=["user"])
        return self._to_entity(model)

    async def update(self, todo: Todo) -> Todo:
        """Update an existing todo."""
        stmt = select(TodoModel).where(TodoModel.id == todo.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Todo {todo.id} not found")

        # Update fields
        model.title = todo.title
        model.description = todo.description
        model.completed = todo.completed
        model.due_date = todo.due_date
        model.updated_at = todo.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a todo."""
        stmt = select(TodoModel).where(TodoModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_for_user(self, user_id: UUID, completed: bool | None = None) -> int:
        """Bulk delete a user's todos in one statement."""
        stmt = delete(TodoModel).where(TodoModel.user_id == user_id)
        if completed is not None:
            stmt = stmt.where(TodoModel.completed == completed)
        result = await self._session.execute(stmt)
        return int(result.rowcount or 0)

    def _to_entity(self, model: TodoModel) -> Todo:
        """Convert ORM model to domain entity."""
        owner = model.user
        return Todo(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            completed=model.completed,
            due_date=model.due_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
            owner_name=owner.name if owner is not None else None,
        )

    def _to_model(self, entity: Todo) -> TodoModel:
        """Convert domain entity to ORM model."""
        return TodoModel(
            id=entity.id,
            user_id=entity.user_id,
            title=entity.title,
            description=entity.description,
            completed=entity.completed,
            due_date=entity.due_date,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
