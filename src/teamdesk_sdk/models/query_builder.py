# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Fluent query builder for TeamDesk ``select`` requests.

The builder only accumulates query intent (columns, filter, sort, skip, top).
Nothing touches the network until :meth:`QueryBuilder.execute` or
:meth:`QueryBuilder.select_all` is called, and neither of them changes the
builder, so one builder can be executed any number of times.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Sequence, Union

from ..data._request import (
    MAX_PAGE_SIZE,
    PreparedRequest,
    build_select_request,
    normalize_sort_direction,
    validate_page_limit,
    validate_skip,
)
from .record import Record

if TYPE_CHECKING:
    import pandas as pd

PAGE_SIZE = MAX_PAGE_SIZE
"""Records requested per page by :meth:`QueryBuilder.select_all`."""

_logger = logging.getLogger(__name__)


@dataclass
class QueryBuilder:
    """
    Fluent interface for building TeamDesk select queries.

    Every mutator validates its input immediately (before any request is
    sent), updates one field and returns the builder for chaining. Calling a
    mutator again overwrites the previous value for that field; nothing
    accumulates.

    :param table: Table name to query.
    :type table: str
    :param view: Optional view name; the request goes to the view endpoint.
    :type view: str | None

    Example:
        Build and execute a query (via client)::

            orders = (client.table("Orders")
                      .select("Order ID", "Total", "Customer")
                      .filter('[Status]="Active" and [Total]>1000')
                      .sort("Order Date", "DESC")
                      .limit(100)
                      .execute())

        Walk a whole table, 500 rows per request::

            for page in client.table("Orders").select().select_all():
                for record in page:
                    print(record["Order ID"])

        Build a standalone query::

            query = QueryBuilder("Orders").columns("Total").limit(10)
            params = query.build()
    """

    table: str
    view: Optional[str] = None
    _columns: List[str] = field(default_factory=list)
    _filter: Optional[str] = None
    _sort_column: Optional[str] = None
    _sort_direction: str = "ASC"
    _top: Optional[int] = None
    _skip: Optional[int] = None
    _client: Any = field(default=None, compare=False, repr=False)

    def columns(self, *names: Union[str, Sequence[str]]) -> "QueryBuilder":
        """
        Choose the columns to retrieve, in order.

        Replaces any previous column selection. No columns means all columns.
        Accepts either several names or a single list of names.

        :param names: Column names.
        :return: Self for method chaining.
        :rtype: QueryBuilder
        :raises TypeError: If a column name is not a string.

        Example::

            query = QueryBuilder("Orders").columns("Order ID", "Total")
            query = QueryBuilder("Orders").columns(["Order ID", "Total"])
        """
        if len(names) == 1 and isinstance(names[0], (list, tuple)):
            names = tuple(names[0])
        for name in names:
            if not isinstance(name, str) or not name:
                raise TypeError(f"column names must be non-empty strings, got {name!r}")
        self._columns = list(names)
        return self

    def filter(self, expression: Optional[str]) -> "QueryBuilder":
        """
        Set the filter, written in the TeamDesk formula language.

        The expression is sent verbatim; it is neither parsed nor validated here.
        Passing ``None`` or ``""`` removes the filter.

        :param expression: Formula expression, e.g. ``'[Status]="Active"'``.
        :type expression: str | None
        :return: Self for method chaining.
        :rtype: QueryBuilder
        :raises ValueError: On view queries, which carry their own filter.
        """
        self._require_table_query("filter")
        if expression is not None and not isinstance(expression, str):
            raise TypeError(f"filter expression must be a string, got {type(expression).__name__}")
        self._filter = expression or None
        return self

    def sort(self, column: str, direction: str = "ASC") -> "QueryBuilder":
        """
        Sort by a single column.

        :param column: Column to sort by.
        :type column: str
        :param direction: ``"ASC"`` (default) or ``"DESC"``, case-insensitive.
        :type direction: str
        :return: Self for method chaining.
        :rtype: QueryBuilder
        :raises ValueError: On view queries, or if ``direction`` is not ASC/DESC.

        Example::

            query = QueryBuilder("Orders").sort("Order Date", "DESC")
        """
        self._require_table_query("sort")
        if not isinstance(column, str) or not column:
            raise TypeError(f"sort column must be a non-empty string, got {column!r}")
        self._sort_direction = normalize_sort_direction(direction)
        self._sort_column = column
        return self

    def limit(self, count: int) -> "QueryBuilder":
        """
        Limit the number of records returned by :meth:`execute`.

        :param count: Number of records, between 1 and 500.
        :type count: int
        :return: Self for method chaining.
        :rtype: QueryBuilder
        :raises ValueError: If ``count`` is outside ``[1, 500]``.
        """
        self._top = validate_page_limit(count)
        return self

    def skip(self, count: int) -> "QueryBuilder":
        """
        Skip the first ``count`` records.

        :param count: Non-negative offset.
        :type count: int
        :return: Self for method chaining.
        :rtype: QueryBuilder
        :raises ValueError: If ``count`` is negative.

        Example::

            page2 = client.table("Orders").select().skip(100).limit(100).execute()
        """
        self._skip = validate_skip(count)
        return self

    def _require_table_query(self, operation: str) -> None:
        if self.view is not None:
            raise ValueError(
                f"{operation}() is not supported on view queries; view '{self.view}' defines its own"
            )

    def build(self) -> dict:
        """
        Build query parameters dictionary.

        :return: Dictionary with table, view, columns, filter, sort, top, skip keys
            (only those that are set).
        :rtype: dict

        Example::

            QueryBuilder("Orders").filter("[Total]>0").limit(10).build()
            # {'table': 'Orders', 'filter': '[Total]>0', 'top': 10}
        """
        params: dict = {"table": self.table}
        if self.view is not None:
            params["view"] = self.view
        if self._columns:
            params["columns"] = list(self._columns)
        if self._filter:
            params["filter"] = self._filter
        if self._sort_column:
            params["sort"] = (self._sort_column, self._sort_direction)
        if self._top is not None:
            params["top"] = self._top
        if self._skip is not None:
            params["skip"] = self._skip
        return params

    def to_request(self) -> PreparedRequest:
        """Assemble the request this query would send, without sending it."""
        return build_select_request(
            self.table,
            view=self.view,
            columns=self._columns,
            filter=self._filter,
            sort_column=self._sort_column,
            sort_direction=self._sort_direction,
            top=self._top,
            skip=self._skip,
        )

    def copy(self, **overrides: Any) -> "QueryBuilder":
        """
        Return an independent copy, optionally overriding fields.

        :param overrides: Field values for the copy, e.g. ``_skip=500``.
        :return: New builder bound to the same client.
        :rtype: QueryBuilder
        """
        overrides.setdefault("_columns", list(self._columns))
        return dataclasses.replace(self, **overrides)

    def _bound_transport(self) -> Any:
        if self._client is None:
            raise RuntimeError(
                "Cannot execute: query was not created via client.table(...). "
                "Bind it with client.table(name).select() instead."
            )
        return self._client._get_transport()

    def execute(self) -> List[Record]:
        """
        Execute the query with a single request.

        :return: Matching records, in service order.
        :rtype: list[Record]
        :raises ~teamdesk_sdk.core.errors.TeamDeskError: If the request fails.
        :raises RuntimeError: If the builder is not bound to a client.
        """
        transport = self._bound_transport()
        rows = transport._select(self.to_request())
        return [Record.from_api_response(self.table, row) for row in rows]

    def select_all(self) -> Iterator[List[Record]]:
        """
        Iterate over every matching record, one page of up to 500 at a time.

        Each call returns a new, independent iterator that starts from this
        builder's ``skip`` (or 0). Pages are always requested at the service
        maximum of 500 records; a ``limit()`` set on the builder does not cap
        the total and is ignored here.

        Iteration stops after an empty page, or after a page shorter than 500.
        When the last page holds exactly 500 records one extra request is made,
        which returns an empty page. A failing request raises at the point the
        failing page is pulled; pages already yielded are unaffected.

        :return: Iterator of record pages.
        :rtype: Iterator[list[Record]]
        :raises ~teamdesk_sdk.core.errors.TeamDeskError: If a page request fails.
        """
        transport = self._bound_transport()
        base = self.copy()

        def _pages() -> Iterator[List[Record]]:
            offset = base._skip or 0
            while True:
                page_query = base.copy(_skip=offset, _top=PAGE_SIZE)
                rows = transport._select(page_query.to_request())
                _logger.debug("select_all %s: offset=%d, %d records", base.table, offset, len(rows))
                if not rows:
                    return
                yield [Record.from_api_response(base.table, row) for row in rows]
                if len(rows) < PAGE_SIZE:
                    return
                offset += PAGE_SIZE

        return _pages()

    def iter_records(self) -> Iterator[Record]:
        """Iterate over every matching record, flattening :meth:`select_all` pages."""
        for page in self.select_all():
            yield from page

    def to_dataframe(self, all_pages: bool = False) -> "pd.DataFrame":
        """
        Execute the query and return the records as a pandas DataFrame.

        ``@row.id`` and ``@row.allow`` are included as the first columns.

        :param all_pages: Page through every matching record via :meth:`select_all`
            instead of issuing a single :meth:`execute`.
        :type all_pages: bool
        :rtype: pandas.DataFrame
        """
        from ..utils._pandas import records_to_dataframe

        records = list(self.iter_records()) if all_pages else self.execute()
        return records_to_dataframe(records)


__all__ = ["QueryBuilder", "PAGE_SIZE"]
