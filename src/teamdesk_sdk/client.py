# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

from __future__ import annotations

import os
from typing import Callable, Optional, TypeVar, Union

import requests

from .core._auth import _AuthManager
from .core.cache import CachedResult, fetch_with_cache
from .core.config import TeamDeskConfig
from .data._request import build_describe_request
from .data._transport import _TeamDeskTransport
from .models.schema import DatabaseSchema
from .operations.tables import TableClient

T = TypeVar("T")


class TeamDeskClient:
    """
    High-level client for the TeamDesk / DBFlex REST API.

    Tables are reached through :meth:`table`, which returns a
    :class:`~teamdesk_sdk.operations.tables.TableClient` exposing fluent
    queries, writes and the table schema. HTTP operations are delegated to an
    internal transport that is created lazily on first use.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager pools connections in a
        ``requests.Session`` and closes it on exit::

            with TeamDeskClient(12345, token="...") as client:
                rows = client.table("Orders").select("Total").limit(10).execute()

    **Without Context Manager**:
        Call ``close()`` when done::

            client = TeamDeskClient(12345, token="...")
            try:
                rows = client.table("Orders").select().execute()
            finally:
                client.close()

    :param app_id: TeamDesk application id.
    :type app_id: int | str
    :param token: API token. Preferred over user/password.
    :type token: str | None
    :param user: User name (only when no token is given).
    :type user: str | None
    :param password: Password for ``user``.
    :type password: str | None
    :param config: Optional configuration. If not provided, defaults are loaded
        from :meth:`~teamdesk_sdk.core.config.TeamDeskConfig.from_env`.
    :type config: ~teamdesk_sdk.core.config.TeamDeskConfig or None

    :raises ValueError: If ``app_id`` is missing, if no usable credentials are
        given, or if bearer auth is configured without a token.

    Example:
        Query, write and fall back to a snapshot::

            from teamdesk_sdk import TeamDeskClient

            with TeamDeskClient(12345, token="your-token") as client:
                active = (client.table("Orders")
                          .select("Order ID", "Total")
                          .filter('[Status]="Active"')
                          .sort("Order Date", "DESC")
                          .limit(100)
                          .execute())

                results = client.table("Clients").create([{"Company Name": "Acme Corp"}])

                snapshot = client.fetch_with_cache(
                    "orders", lambda: client.table("Orders").select().execute()
                )
    """

    def __init__(
        self,
        app_id: Union[int, str],
        token: Optional[str] = None,
        *,
        user: Optional[str] = None,
        password: Optional[str] = None,
        config: Optional[TeamDeskConfig] = None,
    ) -> None:
        self._config = config or TeamDeskConfig.from_env()
        self.auth = _AuthManager(
            app_id,
            token,
            user,
            password,
            use_bearer_auth=self._config.use_bearer_auth,
        )
        if not (self._config.base_url or "").rstrip("/"):
            raise ValueError("base_url is required.")
        self._transport: Optional[_TeamDeskTransport] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

    @classmethod
    def from_env(cls, config: Optional[TeamDeskConfig] = None) -> "TeamDeskClient":
        """
        Create a client from ``TEAMDESK_APP_ID``, ``TEAMDESK_TOKEN``,
        ``TEAMDESK_USER`` and ``TEAMDESK_PASSWORD``.

        :param config: Optional configuration; defaults to :meth:`TeamDeskConfig.from_env`.
        :rtype: TeamDeskClient
        :raises ValueError: If the variables do not describe usable credentials.
        """
        return cls(
            os.environ.get("TEAMDESK_APP_ID", ""),
            os.environ.get("TEAMDESK_TOKEN") or None,
            user=os.environ.get("TEAMDESK_USER") or None,
            password=os.environ.get("TEAMDESK_PASSWORD") or None,
            config=config,
        )

    def __repr__(self) -> str:
        return f"TeamDeskClient(app_id={self.auth.app_id!r}, base_url={self._config.base_url!r})"

    def __enter__(self) -> "TeamDeskClient":
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling.

        :rtype: TeamDeskClient
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            # A transport built before entering would bypass the pooled session
            if self._transport is not None:
                self._transport.close()
                self._transport = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the client and release resources.

        Safe to call multiple times. Called automatically when the client is
        used as a context manager.
        """
        if self._transport is not None:
            self._transport.close()
            self._transport = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    @property
    def config(self) -> TeamDeskConfig:
        return self._config

    @property
    def cache_dir(self) -> Optional[str]:
        """Directory used by :meth:`fetch_with_cache`; ``None`` when caching is disabled."""
        return self._config.cache_dir

    def _get_transport(self) -> _TeamDeskTransport:
        """
        Get or create the internal transport.

        When a session exists (from the context manager), it is passed on for
        connection pooling.

        :rtype: ~teamdesk_sdk.data._transport._TeamDeskTransport
        """
        if self._transport is None:
            self._transport = _TeamDeskTransport(self.auth, self._config, session=self._session)
        return self._transport

    def table(self, name: str) -> TableClient:
        """
        Access a table by name.

        :param name: Table name, e.g. ``"Orders"`` or ``"Sales Orders"``.
        :type name: str
        :rtype: ~teamdesk_sdk.operations.tables.TableClient
        :raises ValueError: If ``name`` is empty.

        Example::

            orders = client.table("Orders")
            recent = orders.select().sort("Date", "DESC").limit(10).execute()
        """
        return TableClient(self, name)

    def describe(self) -> DatabaseSchema:
        """
        Fetch the schema of every table in the application.

        :rtype: ~teamdesk_sdk.models.schema.DatabaseSchema
        :raises ~teamdesk_sdk.core.errors.TeamDeskError: If the request fails.
        """
        body = self._get_transport()._describe(build_describe_request())
        return DatabaseSchema.from_api_response(body)

    def fetch_with_cache(self, key: str, fetcher: Callable[[], T]) -> CachedResult[T]:
        """
        Run ``fetcher`` and snapshot its result under :attr:`cache_dir`, or
        serve the last snapshot if it fails.

        See :func:`teamdesk_sdk.core.cache.fetch_with_cache`.

        :param key: Snapshot name.
        :type key: str
        :param fetcher: Zero-argument callable performing the live fetch.
        :rtype: ~teamdesk_sdk.core.cache.CachedResult
        :raises ValueError: If caching is disabled (``cache_dir`` is ``None``).

        Example::

            result = client.fetch_with_cache(
                "active_orders",
                lambda: client.table("Orders").select().filter('[Status]="Active"').execute(),
            )
            if result.from_cache:
                print(f"API unavailable, using data from {result.cache_age:.0f} minutes ago")
        """
        if not self._config.cache_dir:
            raise ValueError("Caching is disabled: set cache_dir in TeamDeskConfig to use fetch_with_cache().")
        return fetch_with_cache(
            self._config.cache_dir,
            key,
            fetcher,
            strict_writes=self._config.strict_cache_writes,
        )


__all__ = ["TeamDeskClient"]
