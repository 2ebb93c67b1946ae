# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""Table and view namespaces: reads, writes and table schema."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from ..data._request import build_describe_request, build_write_request, encode_segment
from ..models.query_builder import QueryBuilder
from ..models.schema import TableSchema
from ..models.write_result import WriteResult, map_write_results
from ..utils._pandas import dataframe_to_records

if TYPE_CHECKING:
    from ..client import TeamDeskClient

RecordsInput = Union[Sequence[Dict[str, Any]], pd.DataFrame]


def _normalize_records(records: RecordsInput) -> List[Dict[str, Any]]:
    if isinstance(records, pd.DataFrame):
        return dataframe_to_records(records)
    if isinstance(records, dict) or not isinstance(records, (list, tuple)):
        raise TypeError("records must be a list of dicts or a pandas DataFrame")
    if not all(isinstance(r, dict) for r in records):
        raise TypeError("records must contain only dicts")
    return list(records)


class TableClient:
    """
    Operations on one TeamDesk table.

    Obtained via ``client.table(name)``. Table names may contain spaces and
    other reserved characters; they are encoded automatically.

    Example:
        Read::

            orders = client.table("Orders").select("Order ID", "Total").limit(50).execute()

        Write::

            results = client.table("Clients").create([
                {"Company Name": "Acme Corp", "Industry": "Tech"},
            ])
            print(results[0].success, results[0].id)

        Upsert on a match column::

            results = client.table("Contacts").upsert(
                [{"Email": "john@example.com", "Name": "John Doe"}],
                match="Email",
            )
            print(results[0].action)  # "created" or "updated"
    """

    def __init__(self, client: "TeamDeskClient", name: str) -> None:
        encode_segment(name)
        self._client = client
        self.name = name

    def __repr__(self) -> str:
        return f"TableClient({self.name!r})"

    def select(self, *columns: Union[str, Sequence[str]]) -> QueryBuilder:
        """
        Start a select query on this table.

        :param columns: Columns to retrieve; none means all columns.
        :return: Bound query builder.
        :rtype: ~teamdesk_sdk.models.query_builder.QueryBuilder
        """
        query = QueryBuilder(self.name, _client=self._client)
        if columns:
            query.columns(*columns)
        return query

    def view(self, name: str) -> "ViewClient":
        """
        Access a view defined on this table.

        :param name: View name.
        :type name: str
        :rtype: ViewClient
        """
        return ViewClient(self._client, self.name, name)

    def create(self, records: RecordsInput, *, workflow: bool = True) -> List[WriteResult]:
        """
        Create records.

        :param records: Record payloads (list of dicts or DataFrame).
        :param workflow: Run workflow rules for the new records.
        :type workflow: bool
        :return: One result per record, in input order.
        :rtype: list[WriteResult]
        :raises TypeError: If ``records`` is not a list of dicts or a DataFrame.
        :raises ~teamdesk_sdk.core.errors.TeamDeskError: If the request fails.
        """
        return self._write("create", records, workflow=workflow)

    def update(self, records: RecordsInput, *, workflow: bool = True) -> List[WriteResult]:
        """
        Update records. Each payload must identify its record by the table key column.

        :param records: Record payloads (list of dicts or DataFrame).
        :param workflow: Run workflow rules for the changes.
        :type workflow: bool
        :return: One result per record, in input order.
        :rtype: list[WriteResult]
        """
        return self._write("update", records, workflow=workflow)

    def upsert(
        self,
        records: RecordsInput,
        match: Optional[str] = None,
        *,
        workflow: bool = True,
    ) -> List[WriteResult]:
        """
        Create or update records.

        :param records: Record payloads (list of dicts or DataFrame).
        :param match: Column used to find existing records; defaults to the key column.
        :type match: str | None
        :param workflow: Run workflow rules for the changes.
        :type workflow: bool
        :return: One result per record, in input order, with ``action`` set to
            ``"created"`` (status 201) or ``"updated"`` for successful records.
        :rtype: list[WriteResult]
        """
        return self._write("upsert", records, workflow=workflow, match=match)

    def _write(
        self,
        operation: str,
        records: RecordsInput,
        *,
        workflow: bool,
        match: Optional[str] = None,
    ) -> List[WriteResult]:
        payload = _normalize_records(records)
        if not payload:
            return []
        request = build_write_request(self.name, operation, payload, workflow=workflow, match=match)
        raw = self._client._get_transport()._write(request)
        return map_write_results(payload, raw, upsert=operation == "upsert")

    def describe(self) -> TableSchema:
        """
        Fetch this table's schema.

        :rtype: ~teamdesk_sdk.models.schema.TableSchema
        """
        body = self._client._get_transport()._describe(build_describe_request(self.name))
        return TableSchema.from_api_response(body)


class ViewClient:
    """
    Read access to a view of a table.

    Views are queries configured in the TeamDesk UI: they bring their own
    filter and sort order, so view queries accept columns, limit and skip only.

    Example::

        active = client.table("Orders").view("Active Orders").select().limit(100).execute()
    """

    def __init__(self, client: "TeamDeskClient", table: str, name: str) -> None:
        encode_segment(name)
        self._client = client
        self.table = table
        self.name = name

    def __repr__(self) -> str:
        return f"ViewClient({self.table!r}, {self.name!r})"

    def select(self, *columns: Union[str, Sequence[str]]) -> QueryBuilder:
        """
        Start a select query on this view.

        :param columns: Columns to retrieve; none means the view's columns.
        :rtype: ~teamdesk_sdk.models.query_builder.QueryBuilder
        """
        query = QueryBuilder(self.table, view=self.name, _client=self._client)
        if columns:
            query.columns(*columns)
        return query


__all__ = ["TableClient", "ViewClient"]
