# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Credential handling for the TeamDesk REST API.

TeamDesk accepts credentials in one of two mutually exclusive ways:

- embedded in the URL path, as the API token or as ``user:password``;
- as an ``Authorization: Bearer <token>`` header, in which case the URL carries
  no secret at all.
"""

from __future__ import annotations

from typing import Dict, Optional, Union
from urllib.parse import quote

REDACTED = "***"


class _AuthManager:
    """
    Validated credentials plus the knowledge of where to put them.

    :param app_id: TeamDesk application id.
    :type app_id: int | str
    :param token: API token (preferred).
    :type token: str | None
    :param user: User name, used together with ``password`` when no token is given.
    :type user: str | None
    :param password: Password for ``user``.
    :type password: str | None
    :param use_bearer_auth: Send ``token`` as a bearer header instead of in the URL.
    :type use_bearer_auth: bool

    :raises ValueError: If ``app_id`` is missing, if neither a token nor a full
        user/password pair is supplied, or if bearer mode is requested without a token.
    """

    def __init__(
        self,
        app_id: Union[int, str],
        token: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        *,
        use_bearer_auth: bool = False,
    ) -> None:
        if app_id is None or not str(app_id).strip():
            raise ValueError("app_id is required.")
        if not token and not (user and password):
            raise ValueError("Either token or both user and password must be provided.")
        if use_bearer_auth and not token:
            raise ValueError("use_bearer_auth requires a token (user/password cannot be sent as a bearer token).")
        self.app_id = str(app_id).strip()
        self._token = token
        self._user = user
        self._password = password
        self.use_bearer_auth = use_bearer_auth

    @property
    def auth_segment(self) -> Optional[str]:
        """Path segment carrying the credentials, or ``None`` in bearer mode."""
        if self.use_bearer_auth:
            return None
        if self._token:
            return quote(self._token, safe="")
        return f"{quote(self._user or '', safe='')}:{quote(self._password or '', safe='')}"

    def headers(self) -> Dict[str, str]:
        """Authentication headers for a request (empty unless bearer mode is on)."""
        if self.use_bearer_auth and self._token:
            return {"Authorization": f"Bearer {self._token}"}
        return {}

    def redact(self, url: str) -> str:
        """Replace the credential path segment of ``url`` with ``***``."""
        segment = self.auth_segment
        if not segment:
            return url
        return url.replace(f"/{self.app_id}/{segment}/", f"/{self.app_id}/{REDACTED}/", 1)

    def __repr__(self) -> str:
        mode = "bearer" if self.use_bearer_auth else ("token" if self._token else "user")
        return f"_AuthManager(app_id={self.app_id!r}, mode={mode!r})"
