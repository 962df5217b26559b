"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import API_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter, rate_limit_exceeded_handler
from infrastructure.database.session import create_schema, engine

logger = structlog.get_logger()

setup_logging()

PAGINATION_HEADERS = ["X-Total-Count", "X-Page", "X-Page-Size"]

API_DESCRIPTION = f"""\
## Users and their Todos

Create users, give them todos, and track progress.

### Features
- **Users**: unique usernames and emails, partial updates, name search
- **Todos**: owned by exactly one user, filtering, completion toggling
- **Stats**: total, completed and pending counts per user
- **Cascade**: deleting a user deletes all of its todos

### Pagination
List endpoints take `page` (zero-based) and `size` and return
`X-Total-Count`, `X-Page` and `X-Page-Size` headers.

### Rate Limits
- GET endpoints: {READ_LIMIT}
- POST/PUT/PATCH/DELETE: {WRITE_LIMIT}
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and readiness probes"},
    {"name": "users", "description": "User management and statistics"},
    {"name": "todos", "description": "Todo management operations"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create missing tables on startup and release the pool on shutdown."""
    if settings.create_schema:
        await create_schema(engine)
        logger.info("database_schema_ready", dialect=engine.dialect.name)
    yield
    await engine.dispose()


def _install_middleware(app: FastAPI) -> None:
    # Starlette wraps in reverse order: the last one added runs first
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[*PAGINATION_HEADERS, REQUEST_ID_HEADER],
    )


def create_app() -> FastAPI:
    """Build the application with its middleware, handlers and routers."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=API_DESCRIPTION,
        version=API_VERSION,
        debug=settings.debug,
        license_info={"name": "MIT"},
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    _install_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
