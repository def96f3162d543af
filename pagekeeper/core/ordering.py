"""Ordering configuration and keyset direction rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from pagekeeper.core.cursor import CursorToken
from pagekeeper.utils.exceptions import ConfigurationError
from pagekeeper.utils.types import GT, LT

ORDERING_PATTERN = r"^-?([a-zA-Z]+)$"
_ordering_re = re.compile(ORDERING_PATTERN)


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def sort_key(self, field: str) -> str:
        """Render the field in the ``-field`` notation accepted by sources."""
        return f"-{field}" if self is SortDirection.DESCENDING else field


@dataclass(frozen=True)
class OrderingSpec:
    """The single field a cursor paginator orders by, and its default direction."""

    field: str
    descending: bool = False

    @classmethod
    def parse(cls, value: str) -> OrderingSpec:
        """Build a spec from ``"field"`` or ``"-field"``.

        Raises:
            ConfigurationError: If the value does not match ORDERING_PATTERN
        """
        match = _ordering_re.fullmatch(value)
        if match is None:
            raise ConfigurationError(
                f"The field {value} does not match the pattern: {ORDERING_PATTERN}"
            )
        return cls(field=match.group(1), descending=value.startswith("-"))

    def __str__(self) -> str:
        return f"-{self.field}" if self.descending else self.field


@dataclass(frozen=True)
class KeysetPredicate:
    """Strict comparison that continues a fetch past the anchor row."""

    operator: str
    position: str


def physical_direction(token: CursorToken, spec: OrderingSpec) -> SortDirection:
    """Sort direction used for the actual fetch.

    Walking backward reverses the configured order; the fetched rows are
    flipped back afterwards.
    """
    if spec.descending != token.reverse:
        return SortDirection.DESCENDING
    return SortDirection.ASCENDING


def keyset_predicate(
    token: CursorToken,
    spec: OrderingSpec,
    anchor: str | None = None,
) -> KeysetPredicate | None:
    """Filter that resumes strictly after ``anchor`` in the physical direction.

    Args:
        token: Decoded cursor for the request
        spec: Configured ordering
        anchor: Anchor position, defaults to the token's position

    Returns:
        The predicate, or None for a first page
    """
    if anchor is None:
        anchor = token.position
    if not anchor:
        return None
    if physical_direction(token, spec) is SortDirection.DESCENDING:
        return KeysetPredicate(LT, anchor)
    return KeysetPredicate(GT, anchor)
