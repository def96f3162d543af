from __future__ import annotations

import logging
from typing import Any, Collection

from pydantic import ValidationError

from pagekeeper.core.positions import resolve_field
from pagekeeper.sources.base import Source
from pagekeeper.utils.exceptions import FieldNotFound
from pagekeeper.utils.types import EQ, QueryPairs

logger = logging.getLogger(__name__)


def apply_equality_filters(
    source: Source[Any],
    model: type | None,
    params: QueryPairs,
    exclude: Collection[str] = (),
) -> tuple[QueryPairs, Source[Any]]:
    """Turn query parameters naming model fields into equality conditions.

    Keys are matched case-insensitively. Values that cannot be converted to
    the field type are skipped, as are repeated keys after the first.

    Args:
        source: Source to filter
        model: Record type the parameters are matched against
        params: Request query parameters
        exclude: Parameter names reserved by the paginator

    Returns:
        ``(applied, source)``: the parameters actually applied, to be carried
        over into navigation links, and the filtered source
    """
    if model is None:
        return [], source

    applied: QueryPairs = []
    seen: set[str] = set()
    for key, value in params:
        if key in exclude or key.lower() in seen:
            continue
        try:
            field = resolve_field(model, key)
            typed_value = field.coerce(value)
        except FieldNotFound:
            continue
        except ValidationError:
            logger.debug("Skipping filter %s=%r: not a valid %s", key, value, field.annotation)
            continue
        seen.add(key.lower())
        source = source.where(field.name, EQ, typed_value)
        applied.append((key, value))

    return applied, source
