"""Todo API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from api.v1.dependencies import get_todo_service
from api.v1.pagination import PageParams, set_pagination_headers
from api.v1.schemas.common import ErrorResponse, ValidationErrorResponse
from api.v1.schemas.todo import (
    DeleteCompletedResponse,
    TodoCreate,
    TodoResponse,
    TodoUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.todo_service import TodoService

router = APIRouter(prefix="/todos", tags=["todos"])


@router.get(
    "",
    response_model=list[TodoResponse],
    summary="List todos",
    responses={
        200: {"description": "Todos, with X-Total-Count / X-Page / X-Page-Size headers"},
        400: {"model": ValidationErrorResponse, "description": "Invalid page or size"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_todos(
    request: Request,
    response: Response,
    paging: PageParams = Depends(),
    user_id: UUID | None = Query(None, alias="userId", description="Filter by owner"),
    completed: bool | None = Query(None, description="Filter by completion state"),
    service: TodoService = Depends(get_todo_service),
) -> list[TodoResponse]:
    """
    List todos.

    Without filters one page is returned. With `userId` and/or `completed`
    every matching todo is returned and `page`/`size` are not applied.
    `X-Total-Count` is always the number of all todos.
    """
    todos, total = await service.list_todos(
        paging.page, paging.size, user_id=user_id, completed=completed
    )
    set_pagination_headers(response, total, paging)
    return [TodoResponse.from_entity(t) for t in todos]


@router.get(
    "/user/{user_id}",
    response_model=list[TodoResponse],
    summary="List a user's todos",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_user_todos(
    request: Request,
    user_id: UUID,
    completed: bool | None = Query(None, description="Filter by completion state"),
    service: TodoService = Depends(get_todo_service),
) -> list[TodoResponse]:
    """Get every todo owned by a user, optionally by completion state."""
    todos = await service.list_for_user(user_id, completed=completed)
    return [TodoResponse.from_entity(t) for t in todos]


@router.delete(
    "/user/{user_id}/completed",
    response_model=DeleteCompletedResponse,
    summary="Delete a user's completed todos",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_completed_todos(
    request: Request,
    user_id: UUID,
    service: TodoService = Depends(get_todo_service),
) -> DeleteCompletedResponse:
    """Delete every completed todo owned by a user and report how many went."""
    deleted = await service.delete_completed_for_user(user_id)
    return DeleteCompletedResponse(
        message=f"Deleted {deleted} completed todos",
        deleted_count=deleted,
    )


@router.get(
    "/{todo_id}",
    response_model=TodoResponse,
    summary="Get a todo",
    responses={404: {"model": ErrorResponse, "description": "Todo not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_todo(
    request: Request,
    todo_id: UUID,
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Get a specific todo by ID."""
    todo = await service.get_by_id(todo_id)
    return TodoResponse.from_entity(todo)


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a todo",
    responses={
        201: {"description": "Todo created"},
        400: {"model": ValidationErrorResponse, "description": "Unknown owner or validation failed"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_todo(
    request: Request,
    body: TodoCreate,
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Create a todo for an existing user. `completed` defaults to false."""
    todo = await service.create(
        user_id=body.user_id,
        title=body.title,
        description=body.description,
        completed=body.completed,
        due_date=body.due_date,
    )
    return TodoResponse.from_entity(todo)


@router.put(
    "/{todo_id}",
    response_model=TodoResponse,
    summary="Update a todo",
    responses={
        200: {"description": "Todo updated"},
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_todo(
    request: Request,
    todo_id: UUID,
    body: TodoUpdate,
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Update a todo. Omitted or null fields are left unchanged."""
    todo = await service.update(
        todo_id,
        title=body.title,
        description=body.description,
        completed=body.completed,
        due_date=body.due_date,
    )
    return TodoResponse.from_entity(todo)


@router.patch(
    "/{todo_id}/toggle",
    response_model=TodoResponse,
    summary="Toggle a todo's completion",
    responses={404: {"model": ErrorResponse, "description": "Todo not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def toggle_todo(
    request: Request,
    todo_id: UUID,
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Flip a todo between completed and pending."""
    todo = await service.toggle(todo_id)
    return TodoResponse.from_entity(todo)


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a todo",
    responses={
        204: {"description": "Todo deleted"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_todo(
    request: Request,
    todo_id: UUID,
    service: TodoService = Depends(get_todo_service),
) -> None:
    """Delete a todo."""
    await service.delete(todo_id)
    return None
