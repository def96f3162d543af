"""Reading the ordering field off records as comparable position strings."""

from __future__ import annotations

import logging
import types
import typing
from dataclasses import dataclass, field as dataclass_field
from datetime import date, datetime, time
from enum import Enum
from functools import lru_cache
from typing import Any, Sequence

from bson import ObjectId
from pydantic import TypeAdapter
from pydantic.errors import PydanticSchemaGenerationError

from pagekeeper.fields.base import PyObjectId
from pagekeeper.utils.exceptions import FieldNotFound, FieldValueMissing, PositionCollision

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldRef:
    """A resolved field of a record type.

    ``coerce`` turns a position string back into the field's native type so
    sources compare typed values rather than strings.
    """

    name: str
    annotation: Any = Any
    adapter: TypeAdapter | None = dataclass_field(default=None, compare=False, repr=False)

    def coerce(self, position: str) -> Any:
        """Convert a position string to the field type.

        Raises:
            pydantic.ValidationError: If the string is not a valid value for the field
        """
        if self.adapter is None:
            return position
        return self.adapter.validate_python(position)


def _field_annotations(model: type) -> dict[str, Any]:
    """Collect field names and annotations from a pydantic model, dataclass or annotated class."""
    model_fields = getattr(model, "model_fields", None)
    if isinstance(model_fields, dict):
        return {name: info.annotation for name, info in model_fields.items()}
    try:
        return typing.get_type_hints(model)
    except (NameError, TypeError):
        return dict(getattr(model, "__annotations__", {}))


def _with_pydantic_object_ids(annotation: Any) -> Any:
    """Swap bare ``bson.ObjectId`` (also inside Optional/unions) for PyObjectId."""
    if annotation is ObjectId:
        return PyObjectId
    args = typing.get_args(annotation)
    if args and typing.get_origin(annotation) in (typing.Union, types.UnionType) and ObjectId in args:
        return typing.Union[tuple(PyObjectId if arg is ObjectId else arg for arg in args)]
    return annotation


def _build_adapter(annotation: Any) -> TypeAdapter | None:
    if annotation is Any or isinstance(annotation, str):
        return None
    annotation = _with_pydantic_object_ids(annotation)
    try:
        return TypeAdapter(annotation)
    except PydanticSchemaGenerationError:
        logger.debug("No validator for %r, positions will be compared as strings", annotation)
        return None


@lru_cache(maxsize=256)
def resolve_field(model: type, name: str) -> FieldRef:
    """Look up a field on a record type, ignoring case.

    Args:
        model: Record class
        name: Field name as configured

    Returns:
        The resolved field

    Raises:
        FieldNotFound: If the type has no such field
    """
    annotations = _field_annotations(model)
    by_lower = {field_name.lower(): field_name for field_name in annotations}
    actual = by_lower.get(name.lower())
    if actual is None:
        raise FieldNotFound(f"The type {model.__name__} does not have field {name}")
    annotation = annotations[actual]
    return FieldRef(name=actual, annotation=annotation, adapter=_build_adapter(annotation))


def field_for(model: type | None, name: str) -> FieldRef:
    """Resolve ``name`` on ``model``, or keep it untyped when the model is unknown."""
    if model is None:
        return FieldRef(name=name)
    return resolve_field(model, name)


def to_position(value: Any) -> str:
    """Canonical string form of an ordering value."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def extract_position(record: Any, name: str) -> str:
    """Read the ordering field of a record as a position string.

    Raises:
        FieldNotFound: If the record type has no such field
        FieldValueMissing: If the record holds None for the field
    """
    field = resolve_field(type(record), name)
    value = getattr(record, field.name, None)
    if value is None:
        raise FieldValueMissing(
            f"There is no value in {field.name}. Are you sure that it should have one?"
        )
    return to_position(value)


def find_position(
    rows: Sequence[Any],
    name: str,
    reference: str | None,
    reverse: bool = False,
) -> str | None:
    """Find the first position that differs from ``reference``.

    Rows are scanned from the start, or from the end when ``reverse`` is set.

    Raises:
        PositionCollision: If every scanned row holds the reference position
    """
    if reference is None or not rows:
        return None

    scan = reversed(rows) if reverse else iter(rows)
    for row in scan:
        position = extract_position(row, name)
        if position != reference:
            return position

    raise PositionCollision(
        f"Every row on the page holds position {reference}; "
        f"{name} needs unique values to paginate with a cursor"
    )
