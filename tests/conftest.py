# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for TeamDesk SDK tests.

``make_client`` wires a client to ``fixtures.dummy_http.DummyHTTP``, which
replays scripted ``(status, headers, body)`` responses and records every call.
"""

import json

import pytest

from fixtures.dummy_http import DummyHTTP
from fixtures.test_data import SAMPLE_APP_DESCRIBE, SAMPLE_TABLE_DESCRIBE, SAMPLE_UPSERT_RESPONSE
from teamdesk_sdk.client import TeamDeskClient
from teamdesk_sdk.core.config import TeamDeskConfig


@pytest.fixture
def test_config(tmp_path):
    """Test configuration with safe defaults and a per-test cache directory."""
    return TeamDeskConfig(
        base_url="https://td.example/secure/api/v2",
        cache_dir=str(tmp_path / "cache"),
        http_timeout=5,
    )


@pytest.fixture
def make_client(test_config):
    """Factory returning ``(client, http)`` with the transport wired to scripted responses."""

    def _make(responses, **kwargs):
        kwargs.setdefault("token", "secret-token")
        kwargs.setdefault("config", test_config)
        client = TeamDeskClient(12345, **kwargs)
        http = DummyHTTP(responses)
        client._get_transport()._http = http
        return client, http

    return _make


def _make_rows(start, count):
    return [{"@row.id": i, "@row.allow": "Edit", "Name": f"Row {i}"} for i in range(start, start + count)]


@pytest.fixture
def make_rows():
    """Factory for rows shaped like a ``select.json`` response: ``make_rows(start, count)``."""
    return _make_rows


@pytest.fixture
def sample_rows():
    return [
        {"@row.id": 1, "@row.allow": "Edit, Delete", "Order ID": "A-1", "Total": 1200},
        {"@row.id": 2, "@row.allow": "Edit", "Order ID": "A-2", "Total": 80.5},
    ]


@pytest.fixture
def table_describe():
    return json.loads(json.dumps(SAMPLE_TABLE_DESCRIBE))


@pytest.fixture
def app_describe():
    return json.loads(json.dumps(SAMPLE_APP_DESCRIBE))


@pytest.fixture
def upsert_response():
    return json.loads(json.dumps(SAMPLE_UPSERT_RESPONSE))
