"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.todos import router as todos_router
from api.v1.routes.users import router as users_router

router = APIRouter()
router.include_router(users_router)
router.include_router(todos_router)
