"""User API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from api.v1.dependencies import get_user_service
from api.v1.pagination import PageParams, set_pagination_headers
from api.v1.schemas.common import ErrorResponse, ValidationErrorResponse
from api.v1.schemas.user import UserCreate, UserResponse, UserStatsResponse, UserUpdate
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    responses={
        200: {"description": "Users, with X-Total-Count / X-Page / X-Page-Size headers"},
        400: {"model": ValidationErrorResponse, "description": "Invalid page or size"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_users(
    request: Request,
    response: Response,
    paging: PageParams = Depends(),
    search: str | None = Query(None, description="Case-insensitive name fragment"),
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    """
    List users one page at a time.

    When `search` is given, every user whose name contains it is returned
    and paging is not applied.
    """
    users, total = await service.list_users(paging.page, paging.size, search=search)
    set_pagination_headers(response, total, paging)
    return [UserResponse.from_entity(u) for u in users]


@router.get(
    "/username/{username}",
    response_model=UserResponse,
    summary="Get a user by username",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_user_by_username(
    request: Request,
    username: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get a user by exact username."""
    user = await service.get_by_username(username)
    return UserResponse.from_entity(user)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_user(
    request: Request,
    user_id: UUID,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get a user by ID."""
    user = await service.get_by_id(user_id)
    return UserResponse.from_entity(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    responses={
        201: {"description": "User created"},
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        409: {"model": ErrorResponse, "description": "Username or email already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_user(
    request: Request,
    body: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create a user. Username and email must both be unused."""
    user = await service.create(username=body.username, email=body.email, name=body.name)
    return UserResponse.from_entity(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
    responses={
        200: {"description": "User updated"},
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Username or email already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_user(
    request: Request,
    user_id: UUID,
    body: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update a user. Omitted or null fields are left unchanged."""
    user = await service.update(
        user_id,
        username=body.username,
        email=body.email,
        name=body.name,
    )
    return UserResponse.from_entity(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={
        204: {"description": "User and all of its todos deleted"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_user(
    request: Request,
    user_id: UUID,
    service: UserService = Depends(get_user_service),
) -> None:
    """Delete a user and every todo it owns."""
    await service.delete(user_id)
    return None


@router.get(
    "/{user_id}/stats",
    response_model=UserStatsResponse,
    summary="Get todo statistics for a user",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_user_stats(
    request: Request,
    user_id: UUID,
    service: UserService = Depends(get_user_service),
) -> UserStatsResponse:
    """Get total, completed and pending todo counts for a user."""
    stats = await service.get_stats(user_id)
    return UserStatsResponse.from_entity(stats)
