from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Paginated(Generic[T]):
    """Response envelope shared by every pagination strategy.

    Cursor pagination never computes a total, so ``count`` is None there.
    """

    count: int | None
    next: str | None
    previous: str | None
    results: list[T]


@dataclass(frozen=True)
class PageWindow(Generic[T]):
    """Rows fetched for one cursor page, already in logical order."""

    rows: list[T]
    has_more: bool
    following_position: str | None = None


@dataclass(frozen=True)
class NavigationLinks:
    """Absolute previous/next URLs for a page, or None at the edges."""

    previous: str | None
    next: str | None
