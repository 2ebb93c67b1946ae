# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""Unit tests for TeamDeskClient construction, context manager and cache helper."""

import unittest
from unittest.mock import MagicMock, patch

import requests

from teamdesk_sdk.client import TeamDeskClient
from teamdesk_sdk.core._http import _HttpClient
from teamdesk_sdk.core.config import TeamDeskConfig
from teamdesk_sdk.core.errors import ServerError
from teamdesk_sdk.operations.tables import TableClient, ViewClient


class TestClientConstruction(unittest.TestCase):
    def setUp(self):
        self.config = TeamDeskConfig(cache_dir=None)

    def test_requires_credentials(self):
        with self.assertRaises(ValueError):
            TeamDeskClient(12345, config=self.config)

    def test_bearer_requires_token(self):
        with self.assertRaises(ValueError):
            TeamDeskClient(
                12345, user="u", password="p", config=TeamDeskConfig(use_bearer_auth=True)
            )

    def test_no_network_on_construction(self):
        client = TeamDeskClient(12345, "tok", config=self.config)
        self.assertIsNone(client._transport)

    def test_table_and_view_handles(self):
        client = TeamDeskClient(12345, "tok", config=self.config)
        table = client.table("Orders")
        self.assertIsInstance(table, TableClient)
        self.assertIsInstance(table.view("Active"), ViewClient)

    def test_repr_hides_token(self):
        client = TeamDeskClient(12345, "very-secret", config=self.config)
        self.assertNotIn("very-secret", repr(client))

    def test_from_env(self):
        env = {"TEAMDESK_APP_ID": "777", "TEAMDESK_TOKEN": "tok"}
        with patch.dict("os.environ", env, clear=False):
            client = TeamDeskClient.from_env(config=self.config)
        self.assertEqual(client.auth.app_id, "777")
        self.assertEqual(client.auth.auth_segment, "tok")

    def test_from_env_missing_app_id(self):
        with patch.dict("os.environ", {"TEAMDESK_APP_ID": "", "TEAMDESK_TOKEN": "tok"}):
            with self.assertRaises(ValueError):
                TeamDeskClient.from_env(config=self.config)


class TestContextManager(unittest.TestCase):
    """Test context manager support on TeamDeskClient."""

    def setUp(self):
        self.config = TeamDeskConfig(cache_dir=None)

    def test_enter_creates_session(self):
        client = TeamDeskClient(12345, "tok", config=self.config)
        self.assertIsNone(client._session)
        result = client.__enter__()
        self.assertIsInstance(client._session, requests.Session)
        self.assertTrue(client._owns_session)
        self.assertIs(result, client)
        client.close()

    def test_transport_uses_pooled_session(self):
        with TeamDeskClient(12345, "tok", config=self.config) as client:
            transport = client._get_transport()
            self.assertIs(transport._http._session, client._session)
            self.assertIsInstance(transport._http, _HttpClient)

    def test_exit_closes_session(self):
        client = TeamDeskClient(12345, "tok", config=self.config)
        client.__enter__()
        mock_session = MagicMock(spec=requests.Session)
        client._session = mock_session
        client.__exit__(None, None, None)
        mock_session.close.assert_called_once()
        self.assertIsNone(client._session)
        self.assertFalse(client._owns_session)

    def test_close_idempotent(self):
        client = TeamDeskClient(12345, "tok", config=self.config)
        client.__enter__()
        client._get_transport()
        client.close()
        client.close()
        self.assertIsNone(client._transport)

    def test_close_without_enter(self):
        client = TeamDeskClient(12345, "tok", config=self.config)
        client.close()
        self.assertIsNone(client._session)

    def test_exception_propagates(self):
        with self.assertRaises(RuntimeError):
            with TeamDeskClient(12345, "tok", config=self.config):
                raise RuntimeError("boom")


class TestClientCache(unittest.TestCase):
    def test_disabled_cache(self):
        client = TeamDeskClient(12345, "tok", config=TeamDeskConfig(cache_dir=None))
        self.assertIsNone(client.cache_dir)
        with self.assertRaises(ValueError):
            client.fetch_with_cache("orders", lambda: [])

    def test_fetch_with_cache_roundtrip(self):
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            client = TeamDeskClient(12345, "tok", config=TeamDeskConfig(cache_dir=tmp))
            fresh = client.fetch_with_cache("orders", lambda: [{"Total": 1}])
            self.assertFalse(fresh.from_cache)

            def failing():
                raise ServerError("Server error: down", status_code=503)

            stale = client.fetch_with_cache("orders", failing)
            self.assertTrue(stale.from_cache)
            self.assertEqual(stale.data, [{"Total": 1}])


if __name__ == "__main__":
    unittest.main()
