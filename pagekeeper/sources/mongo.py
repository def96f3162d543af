from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

from pagekeeper.lifecycle.observability import track_query
from pagekeeper.sources.connection import get_collection
from pagekeeper.utils.types import EQ, OPERATORS, FilterSpec, SortSpec, merge_filters

T = TypeVar("T", bound=BaseModel)

_MISSING = object()


def _merge_condition(existing: Any, operator: str, value: Any) -> Any:
    """Combine a new comparison with whatever the filter already holds for a key."""
    if existing is _MISSING:
        return value if operator == EQ else {f"${operator}": value}
    if isinstance(existing, dict) and existing and all(k.startswith("$") for k in existing):
        return {**existing, f"${operator}": value}
    return {"$eq": existing, f"${operator}": value}


class MongoSource(Generic[T]):
    """Fluent, lazy, immutable source over a MongoDB collection.

    Raw documents are validated into ``model`` (a pydantic model). Field
    names are translated to their pydantic alias, so ``id`` maps to ``_id``
    when the model declares that alias. The collection defaults to the one
    named by the model's Settings on the registered connection.
    """

    def __init__(
        self,
        model: type[T],
        collection: AsyncCollection | None = None,
        *,
        alias: str | None = None,
        filter: FilterSpec | None = None,
        sort: SortSpec | None = None,
        skip_count: int = 0,
        limit_count: int = 0,
    ) -> None:
        self._model = model
        self._collection = collection
        self._alias = alias
        self._filter: FilterSpec = filter or {}
        self._sort: SortSpec = sort or []
        self._skip_count = skip_count
        self._limit_count = limit_count

    @property
    def model(self) -> type[T]:
        return self._model

    @property
    def collection(self) -> AsyncCollection:
        if self._collection is None:
            return get_collection(self._model, self._alias)
        return self._collection

    def _clone(self, **overrides: Any) -> MongoSource[T]:
        """Return a new MongoSource with merged overrides."""
        defaults = {
            "model": self._model,
            "collection": self._collection,
            "alias": self._alias,
            "filter": self._filter.copy(),
            "sort": self._sort.copy(),
            "skip_count": self._skip_count,
            "limit_count": self._limit_count,
        }
        defaults.update(overrides)
        return type(self)(**defaults)

    # --- Chainable methods ---

    def filter(self, _filter: FilterSpec | None = None, **kwargs: Any) -> MongoSource[T]:
        """Merge a raw MongoDB filter, e.g. ``.filter({"age": {"$gte": 18}})``."""
        merged = merge_filters(self._filter, _filter, **kwargs)
        return self._clone(filter=merged)

    def where(self, field: str, operator: str, value: Any) -> MongoSource[T]:
        if operator not in OPERATORS:
            raise ValueError(f"Unsupported operator '{operator}', expected one of {OPERATORS}")
        key = self._mongo_key(field)
        merged = self._filter.copy()
        merged[key] = _merge_condition(merged.get(key, _MISSING), operator, value)
        return self._clone(filter=merged)

    def sort(self, *fields: str) -> MongoSource[T]:
        """Set sort order. Prefix with '-' for descending.

        Example: .sort("-created_at", "name")
        """
        sort_spec: SortSpec = []
        for field in fields:
            if field.startswith("-"):
                sort_spec.append((self._mongo_key(field[1:]), DESCENDING))
            else:
                sort_spec.append((self._mongo_key(field), ASCENDING))
        return self._clone(sort=sort_spec)

    def skip(self, n: int) -> MongoSource[T]:
        return self._clone(skip_count=n)

    def limit(self, n: int) -> MongoSource[T]:
        return self._clone(limit_count=n)

    # --- Terminal methods ---

    async def all(self) -> list[T]:
        """Execute the query and return all matching records."""
        collection = self.collection
        async with track_query(
            "find", collection.name, self._model.__name__, filter=self._filter,
            sort=self._sort_keys(), limit=self._limit_count or None,
        ) as ctx:
            cursor = self._build_cursor(collection)
            results = []
            async for raw in cursor:
                results.append(self._model.model_validate(raw))
            ctx["result_count"] = len(results)
        return results

    async def count(self) -> int:
        """Count matching documents."""
        collection = self.collection
        async with track_query("count", collection.name, self._model.__name__, filter=self._filter) as ctx:
            result = await collection.count_documents(self._filter)
            ctx["result_count"] = result
        return result

    # --- Internal ---

    def _mongo_key(self, field: str) -> str:
        info = self._model.model_fields.get(field)
        if info is not None and info.alias:
            return info.alias
        return field

    def _sort_keys(self) -> list[str] | None:
        if not self._sort:
            return None
        return [f"-{key}" if direction == DESCENDING else key for key, direction in self._sort]

    def _build_cursor(self, collection: AsyncCollection):
        """Compose a pymongo cursor from stored query parameters."""
        cursor = collection.find(self._filter)
        if self._sort:
            cursor = cursor.sort(self._sort)
        if self._skip_count:
            cursor = cursor.skip(self._skip_count)
        if self._limit_count:
            cursor = cursor.limit(self._limit_count)
        return cursor
