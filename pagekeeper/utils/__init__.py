from pagekeeper.utils.exceptions import (
    PagekeeperError,
    ConfigurationError,
    FieldNotFound,
    FieldValueMissing,
    PositionCollision,
    MalformedCursor,
    NotConnected,
)
from pagekeeper.utils.pagination import Paginated, PageWindow, NavigationLinks
from pagekeeper.utils.settings import SettingsResolver
from pagekeeper.utils.types import (
    FilterSpec,
    SortSpec,
    QueryPairs,
    QueryParams,
    CURSOR_QUERY_PARAM,
    LIMIT_QUERY_PARAM,
    OFFSET_QUERY_PARAM,
    merge_filters,
)

__all__ = [
    "PagekeeperError",
    "ConfigurationError",
    "FieldNotFound",
    "FieldValueMissing",
    "PositionCollision",
    "MalformedCursor",
    "NotConnected",
    "Paginated",
    "PageWindow",
    "NavigationLinks",
    "SettingsResolver",
    "FilterSpec",
    "SortSpec",
    "QueryPairs",
    "QueryParams",
    "CURSOR_QUERY_PARAM",
    "LIMIT_QUERY_PARAM",
    "OFFSET_QUERY_PARAM",
    "merge_filters",
]
