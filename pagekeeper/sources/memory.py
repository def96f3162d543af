from __future__ import annotations

import operator as op
from typing import Any, Callable, Generic, Iterable, TypeVar

from pagekeeper.lifecycle.observability import track_query
from pagekeeper.utils.types import EQ, GT, LT, OPERATORS

T = TypeVar("T")

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {EQ: op.eq, LT: op.lt, GT: op.gt}

Condition = tuple[str, str, Any]


class MemorySource(Generic[T]):
    """Lazy, immutable source over records held in memory.

    Mirrors the database-backed sources so paginators can be exercised
    without a server. ``lt``/``gt`` never match records whose value is None.
    """

    def __init__(
        self,
        records: Iterable[T],
        model: type[T] | None = None,
        conditions: list[Condition] | None = None,
        sort: list[str] | None = None,
        skip_count: int = 0,
        limit_count: int = 0,
    ) -> None:
        self._records: list[T] = list(records)
        if model is None and self._records:
            model = type(self._records[0])
        self._model = model
        self._conditions: list[Condition] = conditions or []
        self._sort: list[str] = sort or []
        self._skip_count = skip_count
        self._limit_count = limit_count

    @property
    def model(self) -> type[T] | None:
        return self._model

    def _clone(self, **overrides: Any) -> MemorySource[T]:
        """Return a new MemorySource with merged overrides."""
        defaults = {
            "records": self._records,
            "model": self._model,
            "conditions": self._conditions.copy(),
            "sort": self._sort.copy(),
            "skip_count": self._skip_count,
            "limit_count": self._limit_count,
        }
        defaults.update(overrides)
        return type(self)(**defaults)

    # --- Chainable methods ---

    def where(self, field: str, operator: str, value: Any) -> MemorySource[T]:
        if operator not in OPERATORS:
            raise ValueError(f"Unsupported operator '{operator}', expected one of {OPERATORS}")
        return self._clone(conditions=self._conditions + [(field, operator, value)])

    def sort(self, *fields: str) -> MemorySource[T]:
        """Set sort order. Prefix with '-' for descending."""
        return self._clone(sort=list(fields))

    def skip(self, n: int) -> MemorySource[T]:
        return self._clone(skip_count=n)

    def limit(self, n: int) -> MemorySource[T]:
        return self._clone(limit_count=n)

    # --- Terminal methods ---

    async def all(self) -> list[T]:
        """Apply conditions, sort, skip and limit, and return the records."""
        async with track_query(
            "find", "memory", self._record_type_name, filter=self._describe(),
            sort=self._sort or None, limit=self._limit_count or None,
        ) as ctx:
            results = self._ordered(self._matching())
            if self._skip_count:
                results = results[self._skip_count:]
            if self._limit_count:
                results = results[:self._limit_count]
            ctx["result_count"] = len(results)
        return results

    async def count(self) -> int:
        """Count matching records, ignoring skip and limit."""
        async with track_query("count", "memory", self._record_type_name, filter=self._describe()) as ctx:
            result = len(self._matching())
            ctx["result_count"] = result
        return result

    # --- Internal ---

    @property
    def _record_type_name(self) -> str:
        return self._model.__name__ if self._model is not None else ""

    def _matching(self) -> list[T]:
        return [record for record in self._records if self._accepts(record)]

    def _accepts(self, record: T) -> bool:
        for field, operator, value in self._conditions:
            current = getattr(record, field, None)
            if current is None and operator != EQ:
                return False
            if not _COMPARATORS[operator](current, value):
                return False
        return True

    def _ordered(self, records: list[T]) -> list[T]:
        # Stable sorts applied from the last key to the first
        ordered = list(records)
        for key in reversed(self._sort):
            descending = key.startswith("-")
            name = key[1:] if descending else key
            ordered.sort(
                key=lambda record: (getattr(record, name, None) is None, getattr(record, name, None)),
                reverse=descending,
            )
        return ordered

    def _describe(self) -> dict[str, Any]:
        described: dict[str, Any] = {}
        for field, operator, value in self._conditions:
            described.setdefault(field, {})[f"${operator}"] = value
        return described
