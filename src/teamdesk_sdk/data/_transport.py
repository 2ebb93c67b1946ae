# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""Low-level TeamDesk REST client: URL shaping, headers, error mapping."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from ..core._auth import _AuthManager
from ..core._classify import classify_error
from ..core._error_codes import INVALID_RESPONSE, TRANSPORT_FAILURE
from ..core._http import _HttpClient
from ..core.config import TeamDeskConfig
from ..core.errors import TeamDeskError
from ._request import PreparedRequest


class _TeamDeskTransport:
    """
    Executes :class:`~teamdesk_sdk.data._request.PreparedRequest` objects.

    Holds only static configuration, so one instance can serve concurrent
    independent requests.

    :param auth: Validated credentials.
    :param config: Client configuration.
    :param session: Optional pooled ``requests.Session``.
    """

    def __init__(
        self,
        auth: _AuthManager,
        config: TeamDeskConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.config = config
        self.base_url = (config.base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("base_url is required.")
        self._http = _HttpClient(timeout=config.http_timeout, session=session)
        self._logger = logging.getLogger(config.logger_name)
        if config.debug:
            self._logger.setLevel(logging.DEBUG)

    def close(self) -> None:
        self._http.close()

    def _build_url(self, path: str) -> str:
        """Prefix ``path`` with the API root, the application id and (unless bearer) the credentials."""
        clean = path[1:] if path.startswith("/") else path
        segment = self.auth.auth_segment
        if segment is None:
            return f"{self.base_url}/{self.auth.app_id}/{clean}"
        return f"{self.base_url}/{self.auth.app_id}/{segment}/{clean}"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        headers.update(self.auth.headers())
        return headers

    def _request(self, method: str, path: str, body: Optional[str] = None) -> Any:
        """
        Perform one round trip and return the parsed JSON body.

        :raises TeamDeskError: Typed error for non-2xx responses, or a generic
            one (``status_code=None``) for connection failures and non-JSON bodies.
        """
        url = self._build_url(path)
        safe_url = self.auth.redact(url)
        self._logger.debug("%s %s", method, safe_url)

        kwargs: Dict[str, Any] = {"headers": self._headers()}
        if body is not None:
            kwargs["data"] = body.encode("utf-8")
        try:
            r = self._http._request(method, url, **kwargs)
        except requests.exceptions.RequestException as exc:
            raise TeamDeskError(
                str(exc) or exc.__class__.__name__, url=safe_url, subcode=TRANSPORT_FAILURE
            ) from exc

        if not 200 <= r.status_code < 300:
            raise classify_error(
                r.status_code,
                self._error_body(r),
                url=safe_url,
                headers=r.headers,
                reason=getattr(r, "reason", None),
            )

        try:
            data = r.json()
        except ValueError as exc:
            raise TeamDeskError(
                f"Invalid JSON in response (HTTP {r.status_code})",
                status_code=r.status_code,
                url=safe_url,
                subcode=INVALID_RESPONSE,
            ) from exc

        if isinstance(data, list):
            self._logger.debug("Response: %d records", len(data))
        else:
            self._logger.debug("Response: %s", type(data).__name__)
        return data

    @staticmethod
    def _error_body(r: Any) -> Any:
        try:
            return r.json()
        except ValueError:
            return getattr(r, "text", None) or None

    def _select(self, request: PreparedRequest) -> List[Dict[str, Any]]:
        data = self._request(request.method, request.path, request.body)
        if not isinstance(data, list):
            raise TeamDeskError(
                f"Expected a JSON array of records, got {type(data).__name__}",
                url=self.auth.redact(self._build_url(request.path)),
                subcode=INVALID_RESPONSE,
            )
        for index, row in enumerate(data):
            if not isinstance(row, dict):
                raise TeamDeskError(
                    f"Expected a JSON object for record {index}, got {type(row).__name__}",
                    url=self.auth.redact(self._build_url(request.path)),
                    subcode=INVALID_RESPONSE,
                )
        return data

    def _write(self, request: PreparedRequest) -> Any:
        return self._request(request.method, request.path, request.body)

    def _describe(self, request: PreparedRequest) -> Dict[str, Any]:
        data = self._request(request.method, request.path, request.body)
        if not isinstance(data, dict):
            raise TeamDeskError(
                f"Expected a JSON object from describe, got {type(data).__name__}",
                url=self.auth.redact(self._build_url(request.path)),
                subcode=INVALID_RESPONSE,
            )
        return data
