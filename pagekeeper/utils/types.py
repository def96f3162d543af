from typing import Any, Iterable, Mapping

# Type aliases for better clarity
FilterSpec = dict[str, Any]
SortSpec = list[tuple[str, int]]
QueryPairs = list[tuple[str, str]]
QueryParams = Mapping[str, Any] | Iterable[tuple[str, str]] | str


# Query parameters understood by the paginators
CURSOR_QUERY_PARAM = "cursor"
LIMIT_QUERY_PARAM = "limit"
OFFSET_QUERY_PARAM = "offset"

# Operators accepted by Source.where()
EQ = "eq"
LT = "lt"
GT = "gt"
OPERATORS = (EQ, LT, GT)


def merge_filters(
    base: FilterSpec | None = None,
    override: FilterSpec | None = None,
    **kwargs: Any
) -> FilterSpec:
    """Merge multiple filter dictionaries with proper precedence.

    Args:
        base: Base filter dict
        override: Override filter dict (takes precedence over base)
        **kwargs: Additional filters (highest precedence)

    Returns:
        Merged filter dictionary
    """
    return {**(base or {}), **(override or {}), **kwargs}
