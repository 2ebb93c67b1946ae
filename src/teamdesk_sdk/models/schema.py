# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Application and table schema models returned by the ``describe`` endpoints.

Only parsing is provided; rendering a schema for humans is left to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class ColumnSchema:
    """
    Column metadata.

    :param name: Column name as used in queries and payloads.
    :type name: str
    :param type: Column type (e.g., "Text", "Numeric", "Date", "Checkbox").
    :type type: str
    :param required: Whether the column is required.
    :type required: bool
    :param unique: Whether the column values must be unique.
    :type unique: bool
    :param max_length: Maximum length for text columns.
    :type max_length: int | None
    """

    name: str
    type: str = "Unknown"
    required: bool = False
    unique: bool = False
    max_length: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "required": self.required,
            "unique": self.unique,
            "max_length": self.max_length,
        }

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "ColumnSchema":
        max_length = response_data.get("maxLength", response_data.get("length"))
        return cls(
            name=str(response_data.get("name", "")),
            type=str(response_data.get("type", "Unknown")),
            required=bool(response_data.get("required", False)),
            unique=bool(response_data.get("unique", False)),
            max_length=max_length if isinstance(max_length, int) else None,
        )


@dataclass
class TableSchema:
    """
    Table metadata.

    :param name: Table name used in API paths.
    :type name: str
    :param records_name: Display name for a set of records (plural).
    :type records_name: str
    :param record_name: Display name for a single record.
    :type record_name: str
    :param columns: Column metadata, in service order.
    :type columns: list[ColumnSchema]

    Example::

        schema = client.table("Orders").describe()
        print(schema.column_names)
        total = schema.column("Total")
    """

    name: str
    records_name: str = ""
    record_name: str = ""
    columns: List[ColumnSchema] = field(default_factory=list)

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def column(self, name: str) -> Optional[ColumnSchema]:
        """Look up a column by exact name; ``None`` if the table has no such column."""
        for c in self.columns:
            if c.name == name:
                return c
        return None

    def __iter__(self) -> Iterator[ColumnSchema]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "TableSchema":
        records_name = str(response_data.get("recordsName", ""))
        raw_columns = response_data.get("columns")
        columns = [
            ColumnSchema.from_api_response(c)
            for c in (raw_columns if isinstance(raw_columns, list) else [])
            if isinstance(c, dict)
        ]
        return cls(
            # Older API versions omit "name"; the plural display name is what paths accept there
            name=str(response_data.get("name") or records_name),
            records_name=records_name,
            record_name=str(response_data.get("recordName", "")),
            columns=columns,
        )


@dataclass
class DatabaseSchema:
    """All tables of an application, from ``describe.json``."""

    tables: List[TableSchema] = field(default_factory=list)

    def table(self, name: str) -> Optional[TableSchema]:
        """Look up a table by ``name`` or ``records_name``."""
        for t in self.tables:
            if name in (t.name, t.records_name):
                return t
        return None

    @property
    def table_names(self) -> List[str]:
        return [t.name for t in self.tables]

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "DatabaseSchema":
        raw_tables = response_data.get("tables")
        tables = [
            TableSchema.from_api_response(t)
            for t in (raw_tables if isinstance(raw_tables, list) else [])
            if isinstance(t, dict)
        ]
        return cls(tables=tables)


__all__ = ["ColumnSchema", "TableSchema", "DatabaseSchema"]
