"""DRF-style paginators: cursor (keyset) and limit/offset."""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, TypeVar
from urllib.parse import parse_qsl

from pydantic import ValidationError

from pagekeeper.core.cursor import FIRST_PAGE, CursorToken, decode_cursor
from pagekeeper.core.filtering import apply_equality_filters
from pagekeeper.core.navigation import build_navigation, with_query
from pagekeeper.core.ordering import OrderingSpec
from pagekeeper.core.positions import FieldRef, field_for, resolve_field, to_position
from pagekeeper.core.window import fetch_window
from pagekeeper.sources.base import Source
from pagekeeper.utils.exceptions import ConfigurationError
from pagekeeper.utils.pagination import Paginated
from pagekeeper.utils.settings import DEFAULT_MAX_PAGE_SIZE, SettingsResolver
from pagekeeper.utils.types import (
    CURSOR_QUERY_PARAM,
    LIMIT_QUERY_PARAM,
    OFFSET_QUERY_PARAM,
    QueryPairs,
    QueryParams,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def normalize_query_params(params: QueryParams | None) -> QueryPairs:
    """Flatten the accepted query parameter shapes into ``(key, value)`` pairs.

    Accepts a raw query string, anything with ``multi_items()`` (starlette's
    QueryParams), a mapping of values or value lists, or an iterable of pairs.
    """
    if params is None:
        return []
    if isinstance(params, str):
        return parse_qsl(params.lstrip("?"), keep_blank_values=True)
    multi_items = getattr(params, "multi_items", None)
    if callable(multi_items):
        return [(str(key), str(value)) for key, value in multi_items()]
    if isinstance(params, Mapping):
        pairs: QueryPairs = []
        for key, value in params.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((key, str(item)) for item in value)
            elif value is not None:
                pairs.append((key, str(value)))
        return pairs
    return [(str(key), str(value)) for key, value in params]


def _first(params: QueryPairs, key: str) -> str | None:
    return next((value for name, value in params if name == key), None)


def _parse_positive_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    return number if number > 0 else None


class PaginationBase(ABC):
    """Shared page-size handling and entry point for all paginators."""

    limit_query_param = LIMIT_QUERY_PARAM

    def __init__(self, default_page_size: int, max_page_size: int = DEFAULT_MAX_PAGE_SIZE) -> None:
        if default_page_size < 1:
            raise ConfigurationError("default_page_size must be >= 1")
        if max_page_size < default_page_size:
            raise ConfigurationError(
                f"max_page_size ({max_page_size}) must be >= default_page_size ({default_page_size})"
            )
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    @property
    def reserved_params(self) -> set[str]:
        """Query parameters consumed by the paginator, never used as filters."""
        return {self.limit_query_param}

    def retrieve_limit(self, value: str | None) -> int:
        """Requested page size clamped to ``max_page_size``, or the default."""
        requested = _parse_positive_int(value)
        if requested is None:
            return self.default_page_size
        return min(requested, self.max_page_size)

    async def paginate(
        self,
        source: Source[T],
        url: str,
        query_params: QueryParams | None = None,
        transform: Callable[[T], R] | None = None,
    ) -> Paginated[Any]:
        """Build one page of ``source`` for a request.

        Args:
            source: Data source, possibly pre-filtered by the caller
            url: Base URL that navigation links are built from
            query_params: Request query parameters
            transform: Optional mapping applied to every returned record

        Returns:
            The paginated envelope
        """
        params = normalize_query_params(query_params)
        paginated = await self._paginate(source, url, params)
        if transform is None:
            return paginated
        return dataclasses.replace(paginated, results=[transform(item) for item in paginated.results])

    @abstractmethod
    async def _paginate(self, source: Source[T], url: str, params: QueryPairs) -> Paginated[T]:
        ...


class CursorPagination(PaginationBase):
    """Keyset pagination over a single ordering field.

    The paginator is configured once and holds no per-request state, so a
    single instance can serve concurrent requests.

    Args:
        default_page_size: Page size when the request gives no valid limit
        max_page_size: Upper bound for requested limits
        ordering: Field to order by, ``-`` prefixed for descending
        model: Record type; when given the ordering field is validated now
    """

    cursor_query_param = CURSOR_QUERY_PARAM

    def __init__(
        self,
        default_page_size: int,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
        ordering: str = "id",
        model: type | None = None,
    ) -> None:
        super().__init__(default_page_size, max_page_size)
        self.ordering = OrderingSpec.parse(ordering)
        self.model = model
        if model is not None:
            resolve_field(model, self.ordering.field)

    @classmethod
    def for_model(cls, model: type) -> CursorPagination:
        """Create a paginator from the model's inner Settings class."""
        return cls(
            SettingsResolver.get_page_size(model),
            SettingsResolver.get_max_page_size(model),
            SettingsResolver.get_ordering(model),
            model=model,
        )

    @property
    def reserved_params(self) -> set[str]:
        return {self.limit_query_param, self.cursor_query_param}

    async def _paginate(self, source: Source[T], url: str, params: QueryPairs) -> Paginated[T]:
        token = decode_cursor(_first(params, self.cursor_query_param))
        limit = self.retrieve_limit(_first(params, self.limit_query_param))
        model = self.model or source.model
        field = field_for(model, self.ordering.field)

        applied, source = apply_equality_filters(source, model, params, exclude=self.reserved_params)
        token = self._normalize_token(token, field)
        logger.debug(
            "Cursor page ordered by %s: direction=%s position=%r limit=%d",
            self.ordering,
            token.direction.value,
            token.position,
            limit,
        )

        window = await fetch_window(source, self.ordering, token, limit, field)
        links = build_navigation(
            token,
            window,
            limit,
            url,
            applied,
            field.name,
            cursor_param=self.cursor_query_param,
            limit_param=self.limit_query_param,
        )
        return Paginated(count=None, next=links.next, previous=links.previous, results=window.rows)

    @staticmethod
    def _normalize_token(token: CursorToken, field: FieldRef) -> CursorToken:
        """Re-render the anchor in canonical form; an anchor of the wrong type resets to page one."""
        if token.position is None:
            return token
        try:
            typed = field.coerce(token.position)
        except ValidationError:
            logger.debug("Cursor position %r is not a valid %s, starting over", token.position, field.name)
            return FIRST_PAGE
        return dataclasses.replace(token, position=to_position(typed))


class LimitOffsetPagination(PaginationBase):
    """Offset pagination: counts the filtered source and skips into it."""

    offset_query_param = OFFSET_QUERY_PARAM

    @property
    def reserved_params(self) -> set[str]:
        return {self.limit_query_param, self.offset_query_param}

    def retrieve_offset(self, value: str | None) -> int:
        return _parse_positive_int(value) or 0

    async def _paginate(self, source: Source[T], url: str, params: QueryPairs) -> Paginated[T]:
        offset = self.retrieve_offset(_first(params, self.offset_query_param))
        limit = self.retrieve_limit(_first(params, self.limit_query_param))
        applied, source = apply_equality_filters(source, source.model, params, exclude=self.reserved_params)

        count = await source.count()
        items = await source.skip(offset).limit(limit).all()

        return Paginated(
            count=count,
            next=self._next_link(url, offset, limit, count, applied),
            previous=self._previous_link(url, offset, limit, applied),
            results=items,
        )

    def _next_link(self, url: str, offset: int, limit: int, count: int, applied: QueryPairs) -> str | None:
        if offset + limit >= count:
            return None
        overrides = [(self.limit_query_param, str(limit)), (self.offset_query_param, str(offset + limit))]
        return with_query(url, applied, overrides)

    def _previous_link(self, url: str, offset: int, limit: int, applied: QueryPairs) -> str | None:
        if offset == 0:
            return None
        if offset - limit <= 0:
            return with_query(url, applied, [(self.limit_query_param, str(limit))], remove=[self.offset_query_param])
        overrides = [(self.limit_query_param, str(limit)), (self.offset_query_param, str(offset - limit))]
        return with_query(url, applied, overrides)
