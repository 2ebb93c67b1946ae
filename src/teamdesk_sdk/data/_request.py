# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Request assembly for the TeamDesk REST API.

Turns a target (table, optional view), an operation name and query parameters
into a :class:`PreparedRequest` holding the method, the path relative to the
application root and the JSON body. No I/O happens here; the transport adds
the base URL and credentials.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union
from urllib.parse import quote

MAX_PAGE_SIZE = 500
"""Hard ceiling on the number of records the service returns per request."""

SORT_SEPARATOR = "//"
SORT_DIRECTIONS = ("ASC", "DESC")
WRITE_OPERATIONS = ("create", "update", "upsert")

QueryValue = Union[str, int, bool, Sequence[str], None]


@dataclass(frozen=True)
class PreparedRequest:
    """
    A fully assembled request, minus base URL and credentials.

    :param method: ``"GET"`` or ``"POST"``.
    :type method: str
    :param path: Path relative to the application root, including the query string.
    :type path: str
    :param body: JSON-encoded body, or ``None`` for reads.
    :type body: str | None
    """

    method: str
    path: str
    body: Optional[str] = None


def encode_segment(name: str) -> str:
    """Percent-encode a table or view name as a single URL path segment."""
    if not isinstance(name, str) or not name:
        raise ValueError("table and view names must be non-empty strings")
    return quote(name, safe="")


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = int(value)
    return quote(str(value), safe="")


def build_query_string(params: Iterable[Tuple[str, QueryValue]]) -> str:
    """
    Encode ordered ``(key, value)`` pairs as a query string.

    Sequence values become repeated ``key=value`` pairs in sequence order rather
    than a single comma-joined value, so a column name that itself contains a
    comma stays unambiguous. ``None`` values are dropped. Every key and value is
    percent-encoded (space becomes ``%20``).

    :return: ``""`` when nothing is left, otherwise ``"?k=v&..."``.
    :rtype: str

    Example::

        build_query_string([("column", ["Name", "Total Due"]), ("top", 10)])
        # '?column=Name&column=Total%20Due&top=10'
    """
    parts: List[str] = []
    for key, value in params:
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                parts.append(f"{_encode(key)}={_encode(item)}")
        else:
            parts.append(f"{_encode(key)}={_encode(value)}")
    return f"?{'&'.join(parts)}" if parts else ""


def normalize_sort_direction(direction: str) -> str:
    if not isinstance(direction, str) or direction.upper() not in SORT_DIRECTIONS:
        raise ValueError(f"sort direction must be 'ASC' or 'DESC', got {direction!r}")
    return direction.upper()


def format_sort(column: str, direction: str = "ASC") -> str:
    """
    Format a sort specification, e.g. ``format_sort("Date", "DESC") == "Date//DESC"``.

    ``//`` cannot appear in a column name, so the token splits unambiguously.
    """
    return f"{column}{SORT_SEPARATOR}{normalize_sort_direction(direction)}"


def validate_page_limit(limit: int) -> int:
    """Return ``limit`` if it lies within ``[1, 500]``; raise ``ValueError`` otherwise."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"limit must be an integer, got {limit!r}")
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if limit > MAX_PAGE_SIZE:
        raise ValueError(f"limit cannot exceed {MAX_PAGE_SIZE} records per request")
    return limit


def validate_skip(skip: int) -> int:
    """Return ``skip`` if it is a non-negative integer; raise ``ValueError`` otherwise."""
    if isinstance(skip, bool) or not isinstance(skip, int):
        raise ValueError(f"skip must be an integer, got {skip!r}")
    if skip < 0:
        raise ValueError("skip must be non-negative")
    return skip


def build_select_request(
    table: str,
    *,
    view: Optional[str] = None,
    columns: Optional[Sequence[str]] = None,
    filter: Optional[str] = None,
    sort_column: Optional[str] = None,
    sort_direction: str = "ASC",
    top: Optional[int] = None,
    skip: Optional[int] = None,
) -> PreparedRequest:
    """
    Assemble ``GET {table}[/{view}]/select.json?column=..&filter=..&sort=..&top=..&skip=..``.

    The filter expression is passed through verbatim (only percent-encoded).
    Absent fields contribute no parameter at all.
    """
    target = encode_segment(table)
    if view is not None:
        target = f"{target}/{encode_segment(view)}"
    params: List[Tuple[str, QueryValue]] = [
        ("column", list(columns) if columns else None),
        ("filter", filter if filter else None),
        ("sort", format_sort(sort_column, sort_direction) if sort_column else None),
        ("top", top),
        ("skip", skip),
    ]
    return PreparedRequest("GET", f"{target}/select.json{build_query_string(params)}")


def build_write_request(
    table: str,
    operation: str,
    records: Sequence[Dict[str, Any]],
    *,
    workflow: bool = True,
    match: Optional[str] = None,
) -> PreparedRequest:
    """
    Assemble ``POST {table}/{create|update|upsert}.json?[match=..&]workflow={0|1}``.

    :param records: Record payloads, sent as a JSON array in the given order.
    :param workflow: Whether the service should run workflow rules for the change.
    :param match: Upsert only: column used to decide between create and update.
    :raises ValueError: If ``operation`` is unknown or ``match`` is used outside upsert.
    """
    if operation not in WRITE_OPERATIONS:
        raise ValueError(f"operation must be one of {WRITE_OPERATIONS}, got {operation!r}")
    if match is not None and operation != "upsert":
        raise ValueError("match column is only supported for upsert")
    params: List[Tuple[str, QueryValue]] = [
        ("match", match if match else None),
        ("workflow", 1 if workflow else 0),
    ]
    path = f"{encode_segment(table)}/{operation}.json{build_query_string(params)}"
    return PreparedRequest("POST", path, json.dumps(list(records)))


def build_describe_request(table: Optional[str] = None) -> PreparedRequest:
    """Assemble ``GET describe.json`` (application) or ``GET {table}/describe.json``."""
    if table is None:
        return PreparedRequest("GET", "describe.json")
    return PreparedRequest("GET", f"{encode_segment(table)}/describe.json")


__all__ = [
    "MAX_PAGE_SIZE",
    "PreparedRequest",
    "encode_segment",
    "build_query_string",
    "format_sort",
    "validate_page_limit",
    "validate_skip",
    "build_select_request",
    "build_write_request",
    "build_describe_request",
]
