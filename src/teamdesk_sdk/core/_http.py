# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Thin ``requests`` wrapper used by the TeamDesk transport.

Applies a default timeout per request and reuses a pooled session when the
client runs as a context manager. There is no retry loop here: callers decide
whether to retry, based on :attr:`~teamdesk_sdk.core.errors.TeamDeskError.is_transient`
and :attr:`~teamdesk_sdk.core.errors.RateLimitError.retry_after`.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

# Default timeouts in seconds
READ_TIMEOUT = 10
WRITE_TIMEOUT = 120


class _HttpClient:
    """
    Sends single HTTP requests.

    :param timeout: Timeout in seconds applied to every request. ``None`` uses
        :data:`READ_TIMEOUT` for GET and :data:`WRITE_TIMEOUT` for POST.
    :type timeout: float | None
    :param session: Pooled session shared with the owning client, if any.
    :type session: requests.Session | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout = timeout
        self._session = session

    def _timeout_for(self, method: str) -> float:
        if self.default_timeout is not None:
            return self.default_timeout
        return WRITE_TIMEOUT if (method or "").upper() == "POST" else READ_TIMEOUT

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Send one request and return the raw response, whatever its status.

        :param method: ``"GET"`` or ``"POST"``.
        :param url: Absolute URL, credentials included.
        :param kwargs: Passed through to ``requests`` (``headers``, ``data``, ``timeout``).
        :rtype: requests.Response
        :raises requests.exceptions.RequestException: On connection-level failures.
        """
        kwargs.setdefault("timeout", self._timeout_for(method))
        send = self._session.request if self._session is not None else requests.request
        return send(method, url, **kwargs)

    def close(self) -> None:
        """Close the pooled session, if any. Safe to call repeatedly."""
        if self._session is not None:
            self._session.close()
            self._session = None
