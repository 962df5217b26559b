"""Page/size query parameters and pagination headers."""

from dataclasses import dataclass

from fastapi import Query, Response

from core.config import settings


@dataclass
class PageParams:
    """Zero-based page and page size taken from the query string."""

    page: int = Query(0, ge=0, description="Zero-based page index")
    size: int = Query(settings.default_page_size, ge=1, description="Page size")


def set_pagination_headers(response: Response, total: int, params: PageParams) -> None:
    """Expose the total count and requested page on the response."""
    response.headers["X-Total-Count"] = str(total)
    response.headers["X-Page"] = str(params.page)
    response.headers["X-Page-Size"] = str(params.size)
