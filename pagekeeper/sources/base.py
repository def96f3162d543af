from __future__ import annotations

from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class Source(Protocol[T]):
    """Orderable, filterable, asynchronously fetchable sequence of records.

    Chainable methods return a new source and never mutate the receiver.
    Nothing is fetched until ``all()`` or ``count()`` is awaited.
    """

    @property
    def model(self) -> type[T] | None: ...

    def sort(self, *fields: str) -> Source[T]:
        """Set sort order. Prefix with '-' for descending."""
        ...

    def where(self, field: str, operator: str, value: Any) -> Source[T]:
        """Add a condition; ``operator`` is one of ``eq``, ``lt`` or ``gt``."""
        ...

    def skip(self, n: int) -> Source[T]: ...

    def limit(self, n: int) -> Source[T]: ...

    async def all(self) -> list[T]: ...

    async def count(self) -> int: ...
