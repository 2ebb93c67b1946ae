# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""Tests for QueryBuilder.select_all page walking."""

from unittest.mock import MagicMock
from urllib.parse import parse_qsl, urlsplit

import pytest

from teamdesk_sdk.core.errors import ServerError
from teamdesk_sdk.models.query_builder import PAGE_SIZE, QueryBuilder


def _rows(start, count):
    return [{"@row.id": i, "Name": f"Row {i}"} for i in range(start, start + count)]


class FakeTable:
    """Serves ``total`` rows honouring ``top``/``skip`` and records each request."""

    def __init__(self, total, fail_at_skip=None):
        self.total = total
        self.fail_at_skip = fail_at_skip
        self.requests = []

    def _select(self, request):
        params = dict(parse_qsl(urlsplit(request.path).query))
        self.requests.append(params)
        skip = int(params.get("skip", 0))
        top = int(params.get("top", PAGE_SIZE))
        if self.fail_at_skip is not None and skip == self.fail_at_skip:
            raise ServerError("Server error: HTTP 503", status_code=503)
        end = min(skip + top, self.total)
        return _rows(skip, max(0, end - skip))


def bound_query(table, fake):
    client = MagicMock()
    client._get_transport.return_value = fake
    return QueryBuilder(table, _client=client)


@pytest.mark.parametrize(
    "total,expected_pages",
    [
        (0, []),
        (1, [1]),
        (499, [499]),
        (500, [500]),
        (501, [500, 1]),
        (1000, [500, 500]),
        (1234, [500, 500, 234]),
    ],
)
def test_page_sizes_and_request_count(total, expected_pages):
    fake = FakeTable(total)
    pages = list(bound_query("Orders", fake).select_all())
    assert [len(p) for p in pages] == expected_pages
    # Full pages need one more request to detect the end
    full = total > 0 and total % PAGE_SIZE == 0
    assert len(fake.requests) == (len(expected_pages) + 1 if full or total == 0 else len(expected_pages))
    assert [r.id for page in pages for r in page] == list(range(total))


def test_every_page_requests_500_and_advances_skip():
    fake = FakeTable(1234)
    list(bound_query("Orders", fake).select_all())
    assert [r["top"] for r in fake.requests] == ["500", "500", "500"]
    assert [r["skip"] for r in fake.requests] == ["0", "500", "1000"]


def test_limit_is_ignored_for_paging():
    fake = FakeTable(700)
    query = bound_query("Orders", fake).limit(10)
    pages = list(query.select_all())
    assert [len(p) for p in pages] == [500, 200]
    assert query.build()["top"] == 10


def test_starts_from_builder_skip():
    fake = FakeTable(1200)
    pages = list(bound_query("Orders", fake).skip(300).select_all())
    assert [len(p) for p in pages] == [500, 400]
    assert [r["skip"] for r in fake.requests] == ["300", "800"]
    assert pages[0][0].id == 300


def test_query_parameters_are_kept_on_every_page():
    fake = FakeTable(600)
    query = bound_query("Orders", fake).columns("Name").filter("[Total]>0").sort("Name", "DESC")
    list(query.select_all())
    for params in fake.requests:
        assert params["column"] == "Name"
        assert params["filter"] == "[Total]>0"
        assert params["sort"] == "Name//DESC"


def test_nothing_is_requested_until_iteration():
    fake = FakeTable(10)
    pages = bound_query("Orders", fake).select_all()
    assert fake.requests == []
    next(pages)
    assert len(fake.requests) == 1


def test_failure_mid_iteration_keeps_yielded_pages():
    fake = FakeTable(2000, fail_at_skip=1000)
    pages = bound_query("Orders", fake).select_all()
    received = [next(pages), next(pages)]
    with pytest.raises(ServerError):
        next(pages)
    assert [len(p) for p in received] == [500, 500]
    with pytest.raises(StopIteration):
        next(pages)


def test_iterators_are_independent():
    fake = FakeTable(1200)
    query = bound_query("Orders", fake)
    first = query.select_all()
    second = query.select_all()
    a1 = next(first)
    b1 = next(second)
    a2 = next(first)
    assert a1[0].id == b1[0].id == 0
    assert a2[0].id == 500


def test_builder_changes_after_start_do_not_leak_into_iterator():
    fake = FakeTable(1200)
    query = bound_query("Orders", fake).filter("[A]=1")
    pages = query.select_all()
    next(pages)
    query.filter("[B]=2").skip(900)
    next(pages)
    assert fake.requests[1]["filter"] == "[A]=1"
    assert fake.requests[1]["skip"] == "500"


def test_iter_records_flattens():
    fake = FakeTable(501)
    records = list(bound_query("Orders", fake).iter_records())
    assert len(records) == 501
    assert records[-1].id == 500


def test_view_pagination_path():
    fake = FakeTable(3)
    client = MagicMock()
    client._get_transport.return_value = fake
    pages = list(QueryBuilder("Orders", view="Open Orders", _client=client).select_all())
    assert len(pages) == 1
