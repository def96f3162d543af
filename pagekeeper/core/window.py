from __future__ import annotations

import logging
from typing import Any

from pagekeeper.core.cursor import CursorToken
from pagekeeper.core.ordering import OrderingSpec, keyset_predicate, physical_direction
from pagekeeper.core.positions import FieldRef, extract_position, field_for
from pagekeeper.sources.base import Source
from pagekeeper.utils.pagination import PageWindow

logger = logging.getLogger(__name__)

# One row past the page, fetched only to learn whether more data exists
LOOKAHEAD = 1


async def fetch_window(
    source: Source[Any],
    spec: OrderingSpec,
    token: CursorToken,
    limit: int,
    field: FieldRef | None = None,
) -> PageWindow[Any]:
    """Fetch one page of rows around the token's anchor.

    Issues a single ``all()`` on the source. Rows come back in the
    configured order whatever the traversal direction.

    Args:
        source: Filtered data source
        spec: Configured ordering
        token: Decoded cursor
        limit: Page size
        field: Resolved ordering field, looked up on ``source.model`` if omitted

    Returns:
        The page window

    Raises:
        FieldValueMissing: If any fetched row has no value for the ordering field
    """
    if field is None:
        field = field_for(source.model, spec.field)

    direction = physical_direction(token, spec)
    query = source.sort(direction.sort_key(field.name))
    predicate = keyset_predicate(token, spec)
    if predicate is not None:
        query = query.where(field.name, predicate.operator, field.coerce(predicate.position))

    items = await query.limit(limit + LOOKAHEAD).all()

    has_more = len(items) > limit
    rows = items[:limit]
    # Every fetched row must carry an ordering value, not only the boundaries
    for row in rows:
        extract_position(row, field.name)
    following_position = extract_position(items[limit], field.name) if has_more else None
    if token.reverse:
        rows.reverse()

    logger.debug(
        "Fetched %d rows ordered %s (anchor=%r, has_more=%s)",
        len(rows),
        direction.value,
        token.position,
        has_more,
    )
    return PageWindow(rows=rows, has_more=has_more, following_position=following_position)
