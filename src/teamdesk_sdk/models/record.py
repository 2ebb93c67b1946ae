# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Record data model for TeamDesk rows.

Provides a structured representation of a TeamDesk row with dict-like access
to its user fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

ROW_ID_FIELD = "@row.id"
ROW_ALLOW_FIELD = "@row.allow"

# Type aliases for semantic clarity
RowId = int  # server-assigned row identifier
TableName = str  # e.g., "Orders", "Client Contacts"


@dataclass
class Record:
    """
    A single TeamDesk row.

    Every row returned by the service carries a server-assigned identifier
    (``@row.id``) and usually a permissions descriptor (``@row.allow``) next to
    the user fields. Those two are lifted into attributes; ``data`` keeps the
    user fields only, in the order the service returned them.

    :param id: Server-assigned row id, or ``None`` if the response omitted it.
    :type id: int | None
    :param table: Table the row was read from.
    :type table: str
    :param data: User fields.
    :type data: dict[str, Any]
    :param allow: Permissions descriptor, e.g. ``"Edit, Delete"``.
    :type allow: str | None

    Example::

        for record in client.table("Orders").select("Order ID", "Total").execute():
            print(record.id, record["Total"])
            if "Edit" in (record.allow or ""):
                ...
    """

    id: Optional[RowId]
    table: TableName
    data: Dict[str, Any] = field(default_factory=dict)
    allow: Optional[str] = None

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __delitem__(self, key: str) -> None:
        del self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def keys(self):
        return self.data.keys()

    def values(self):
        return self.data.values()

    def items(self):
        return self.data.items()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a plain dictionary of user fields (no ``@row.*`` metadata).

        :return: Dictionary of field data.
        :rtype: dict[str, Any]
        """
        return dict(self.data)

    def to_api_dict(self) -> Dict[str, Any]:
        """
        Convert back to the row shape the service returned.

        ``@row.id`` and ``@row.allow`` come first, followed by the user fields.
        Metadata that was absent in the response stays absent.

        :return: Dictionary in API row shape.
        :rtype: dict[str, Any]
        """
        out: Dict[str, Any] = {}
        if self.id is not None:
            out[ROW_ID_FIELD] = self.id
        if self.allow is not None:
            out[ROW_ALLOW_FIELD] = self.allow
        out.update(self.data)
        return out

    @classmethod
    def from_api_response(cls, table: str, response_data: Dict[str, Any]) -> "Record":
        """
        Create a Record from one row of a ``select.json`` response.

        :param table: Table name.
        :type table: str
        :param response_data: Raw row dictionary.
        :type response_data: dict[str, Any]
        :return: Record instance.
        :rtype: Record
        """
        data = dict(response_data)
        row_id = data.pop(ROW_ID_FIELD, None)
        allow = data.pop(ROW_ALLOW_FIELD, None)
        # Remaining "@row.*" annotations are service metadata, not user fields
        clean_data = {k: v for k, v in data.items() if not k.startswith("@row.")}
        return cls(id=row_id, table=table, data=clean_data, allow=allow)


__all__ = ["Record", "RowId", "TableName", "ROW_ID_FIELD", "ROW_ALLOW_FIELD"]
