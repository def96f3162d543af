"""Previous/next link construction for cursor pages."""

from __future__ import annotations

from typing import Any, Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pagekeeper.core.cursor import CursorToken, Direction, encode_cursor
from pagekeeper.core.positions import find_position
from pagekeeper.utils.pagination import NavigationLinks, PageWindow
from pagekeeper.utils.types import CURSOR_QUERY_PARAM, LIMIT_QUERY_PARAM, QueryPairs


def retrieve_positions(
    token: CursorToken,
    window: PageWindow[Any],
    field_name: str,
) -> tuple[str | None, str | None]:
    """Compute the previous and next anchor positions for a window.

    The current anchor guards the edge we came from, the lookahead row
    guards the edge we are heading to. Walking backward swaps the edges.

    Returns:
        ``(previous, next)`` positions, None where no link should exist
    """
    rows = window.rows
    behind, ahead = token.position, window.following_position
    if token.reverse:
        behind, ahead = ahead, behind

    previous = find_position(rows, field_name, behind)
    following = find_position(rows, field_name, ahead, reverse=True)
    return previous, following


def with_query(
    url: str,
    params: QueryPairs,
    overrides: QueryPairs,
    remove: Iterable[str] = (),
) -> str:
    """Return ``url`` with extra params appended and ``overrides`` replacing same-named keys.

    Keys listed in ``remove`` are dropped, as are keys of the base URL that
    ``params`` sets again. An empty path is rendered as ``/``.
    """
    parts = urlsplit(url)
    params = list(params)
    override_keys = {key for key, _ in overrides} | set(remove)
    replaced_keys = override_keys | {key for key, _ in params}
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in replaced_keys
    ]
    query.extend((key, value) for key, value in params if key not in override_keys)
    query.extend(overrides)
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path or "/", urlencode(query), parts.fragment)
    )


def build_link(
    url: str,
    limit: int,
    token: CursorToken | None,
    passthrough: QueryPairs,
    cursor_param: str = CURSOR_QUERY_PARAM,
    limit_param: str = LIMIT_QUERY_PARAM,
) -> str | None:
    """Render a navigation URL carrying the encoded token, or None without a token."""
    if token is None:
        return None
    overrides = [(cursor_param, encode_cursor(token)), (limit_param, str(limit))]
    return with_query(url, passthrough, overrides)


def build_navigation(
    token: CursorToken,
    window: PageWindow[Any],
    limit: int,
    url: str,
    passthrough: QueryPairs,
    field_name: str,
    cursor_param: str = CURSOR_QUERY_PARAM,
    limit_param: str = LIMIT_QUERY_PARAM,
) -> NavigationLinks:
    previous_position, next_position = retrieve_positions(token, window, field_name)

    previous_token = None
    if previous_position is not None:
        previous_token = CursorToken(Direction.BACKWARD, previous_position)
    next_token = None
    if next_position is not None:
        next_token = CursorToken(Direction.FORWARD, next_position)

    return NavigationLinks(
        previous=build_link(url, limit, previous_token, passthrough, cursor_param, limit_param),
        next=build_link(url, limit, next_token, passthrough, cursor_param, limit_param),
    )
