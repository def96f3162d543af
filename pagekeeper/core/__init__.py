from pagekeeper.core.cursor import (
    CursorToken,
    Direction,
    FIRST_PAGE,
    encode_cursor,
    decode_cursor,
    parse_cursor,
)
from pagekeeper.core.ordering import (
    OrderingSpec,
    SortDirection,
    KeysetPredicate,
    physical_direction,
    keyset_predicate,
)
from pagekeeper.core.positions import FieldRef, resolve_field, extract_position, find_position
from pagekeeper.core.window import fetch_window
from pagekeeper.core.navigation import build_link, build_navigation, retrieve_positions
from pagekeeper.core.filtering import apply_equality_filters
from pagekeeper.core.pagination import (
    PaginationBase,
    CursorPagination,
    LimitOffsetPagination,
    normalize_query_params,
)

__all__ = [
    "CursorToken",
    "Direction",
    "FIRST_PAGE",
    "encode_cursor",
    "decode_cursor",
    "parse_cursor",
    "OrderingSpec",
    "SortDirection",
    "KeysetPredicate",
    "physical_direction",
    "keyset_predicate",
    "FieldRef",
    "resolve_field",
    "extract_position",
    "find_position",
    "fetch_window",
    "build_link",
    "build_navigation",
    "retrieve_positions",
    "apply_equality_filters",
    "PaginationBase",
    "CursorPagination",
    "LimitOffsetPagination",
    "normalize_query_params",
]
