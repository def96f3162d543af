"""Opaque cursor tokens exchanged with clients."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qs, urlencode

from pagekeeper.utils.exceptions import MalformedCursor

logger = logging.getLogger(__name__)

_REVERSE_KEY = "r"
_POSITION_KEY = "p"
_BOOLEANS = {"true": True, "false": False}


class Direction(str, Enum):
    """Traversal direction requested by the client."""

    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class CursorToken:
    """Decoded navigation token.

    ``BACKWARD`` asks for the page before ``position``; a missing position
    means the first page in the requested direction.
    """

    direction: Direction = Direction.FORWARD
    position: str | None = None

    @property
    def reverse(self) -> bool:
        return self.direction is Direction.BACKWARD


FIRST_PAGE = CursorToken()


def encode_cursor(token: CursorToken) -> str:
    """Render a token as an opaque, URL-safe string.

    Args:
        token: Token to encode

    Returns:
        Base64 encoded ``r=<bool>&p=<position>`` payload
    """
    payload = urlencode(
        {_REVERSE_KEY: str(token.reverse), _POSITION_KEY: token.position or ""}
    )
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")


def parse_cursor(value: str) -> CursorToken:
    """Strictly decode a cursor string.

    Args:
        value: Encoded cursor received from a client

    Returns:
        The decoded token

    Raises:
        MalformedCursor: If the value is not a token produced by encode_cursor()
    """
    try:
        payload = base64.urlsafe_b64decode(value.encode("ascii")).decode("utf-8")
        fields = parse_qs(payload, keep_blank_values=True, strict_parsing=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedCursor(f"Cursor {value!r} could not be decoded: {e}") from e

    if set(fields) != {_REVERSE_KEY, _POSITION_KEY}:
        raise MalformedCursor(
            f"Cursor must hold exactly the keys '{_REVERSE_KEY}' and '{_POSITION_KEY}', "
            f"got {sorted(fields)}"
        )
    if any(len(values) != 1 for values in fields.values()):
        raise MalformedCursor("Cursor keys must appear exactly once")

    reverse = _BOOLEANS.get(fields[_REVERSE_KEY][0].lower())
    if reverse is None:
        raise MalformedCursor(f"Invalid direction flag {fields[_REVERSE_KEY][0]!r}")

    position = fields[_POSITION_KEY][0] or None
    direction = Direction.BACKWARD if reverse else Direction.FORWARD
    return CursorToken(direction=direction, position=position)


def decode_cursor(value: str | None) -> CursorToken:
    """Decode a cursor, falling back to the first page on any error."""
    if not value:
        return FIRST_PAGE
    try:
        return parse_cursor(value)
    except MalformedCursor as e:
        logger.debug("Ignoring malformed cursor: %s", e)
        return FIRST_PAGE
