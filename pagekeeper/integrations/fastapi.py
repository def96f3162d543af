from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from fastapi import Request
from pydantic import BaseModel

from pagekeeper.core.pagination import PaginationBase
from pagekeeper.sources.base import Source
from pagekeeper.utils.exceptions import PagekeeperError
from pagekeeper.utils.pagination import Paginated

T = TypeVar("T")


def register_exception_handlers(app: Any) -> None:
    """Register pagekeeper exception handlers on a FastAPI app."""
    from starlette.responses import JSONResponse

    @app.exception_handler(PagekeeperError)
    async def pagekeeper_error_handler(request: Any, exc: PagekeeperError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})


async def paginate_request(
    request: Request,
    source: Source[Any],
    paginator: PaginationBase,
    transform: Callable[[Any], Any] | None = None,
) -> Paginated[Any]:
    """Paginate ``source`` for the current request.

    Links are built from the request URL without its query string; the
    paginator re-adds ``cursor``/``limit`` (or ``offset``) and the filters
    it applied.
    """
    url = str(request.url.replace(query=""))
    return await paginator.paginate(
        source, url, request.query_params.multi_items(), transform=transform
    )


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated response model for API endpoints."""

    count: int | None = None
    next: str | None = None
    previous: str | None = None
    results: list[T]

    @classmethod
    def from_paginated(cls, paginated: Paginated) -> PaginatedResponse:
        return cls(
            count=paginated.count,
            next=paginated.next,
            previous=paginated.previous,
            results=paginated.results,
        )
