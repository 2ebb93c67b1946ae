# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Per-record outcomes of create, update and upsert calls.

The service answers a write with one entry per submitted record, in
submission order, each carrying its own HTTP-style status. A write call as a
whole can therefore succeed while individual records fail.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..core._classify import parse_error_response
from ..core._error_codes import INVALID_RESPONSE
from ..core.errors import FieldError, TeamDeskError

ACTION_CREATED = "created"
ACTION_UPDATED = "updated"


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of writing a single record.

    :param success: ``True`` when ``200 <= status < 300``.
    :type success: bool
    :param status: Per-record status code reported by the service.
    :type status: int
    :param id: Row id of the created or updated record.
    :type id: int | None
    :param key: Key column value of the record.
    :type key: str | None
    :param action: Upsert only: ``"created"`` or ``"updated"``; ``None`` for create and update.
    :type action: str | None
    :param errors: Errors the service reported for this record.
    :type errors: list[FieldError]

    Example::

        results = client.table("Contacts").upsert(rows, match="Email")
        for row, result in zip(rows, results):
            if not result.success:
                print(row["Email"], [str(e) for e in result.errors])
    """

    success: bool
    status: int
    id: Optional[int] = None
    key: Optional[str] = None
    action: Optional[str] = None
    errors: List[FieldError] = field(default_factory=list)

    @classmethod
    def from_api_response(cls, entry: Dict[str, Any], *, upsert: bool = False) -> "WriteResult":
        """
        Build a result from one entry of a write response.

        For upserts the action follows the service convention: status ``201``
        means the record was created, any other successful status means an
        existing record was updated. The content of the entry is not inspected.

        :param entry: Raw entry, at least ``{"status": int}``.
        :type entry: dict[str, Any]
        :param upsert: Derive ``action`` from the status.
        :type upsert: bool
        :raises TeamDeskError: If the entry has no integer status.
        """
        status = entry.get("status") if isinstance(entry, dict) else None
        if isinstance(status, bool) or not isinstance(status, int):
            raise TeamDeskError(
                f"Write response entry is missing an integer status: {entry!r}",
                subcode=INVALID_RESPONSE,
            )
        success = 200 <= status < 300

        errors: List[FieldError] = []
        if "errors" in entry or (not success and "message" in entry):
            _, errors = parse_error_response(entry)

        action: Optional[str] = None
        if upsert and success:
            action = ACTION_CREATED if status == 201 else ACTION_UPDATED

        key = entry.get("key")
        return cls(
            success=success,
            status=status,
            id=entry.get("id"),
            key=str(key) if key is not None else None,
            action=action,
            errors=errors,
        )


def map_write_results(
    records: Sequence[Any],
    raw: Any,
    *,
    upsert: bool = False,
) -> List[WriteResult]:
    """
    Pair each submitted record with its outcome.

    :param records: The records that were submitted.
    :param raw: Parsed response body; must be a list with one entry per record.
    :param upsert: Derive ``action`` for each result.
    :return: One :class:`WriteResult` per submitted record, in submission order.
    :rtype: list[WriteResult]
    :raises TeamDeskError: If the body is not a list or its length differs from ``records``.
    """
    if not isinstance(raw, list):
        raise TeamDeskError(
            f"Expected a JSON array of write results, got {type(raw).__name__}",
            subcode=INVALID_RESPONSE,
        )
    if len(raw) != len(records):
        raise TeamDeskError(
            f"Write response has {len(raw)} entries for {len(records)} submitted records",
            subcode=INVALID_RESPONSE,
        )
    return [WriteResult.from_api_response(entry, upsert=upsert) for entry in raw]


__all__ = ["WriteResult", "map_write_results", "ACTION_CREATED", "ACTION_UPDATED"]
