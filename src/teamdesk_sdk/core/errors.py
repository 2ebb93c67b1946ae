# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Structured error types for the TeamDesk SDK.

Every failure coming back from the remote service is surfaced as exactly one
:class:`TeamDeskError`. The concrete subclass (and the matching ``code``
attribute) tells callers what happened:

- :class:`AuthenticationError` - 401 / 403
- :class:`NotFoundError` - 404
- :class:`RateLimitError` - 429, with an optional ``retry_after`` hint
- :class:`ValidationError` - 400 / 422, with per-column ``errors``
- :class:`ServerError` - 5xx
- :class:`TeamDeskError` itself - any other status, or no response at all

Local precondition violations (bad ``limit``, negative ``skip``, missing
credentials) are raised as :class:`ValueError` / :class:`TypeError` and are
never part of this hierarchy.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ._error_codes import (
    AUTHENTICATION_ERROR,
    NOT_FOUND,
    RATE_LIMIT,
    REQUEST_ERROR,
    SERVER_ERROR,
    VALIDATION_ERROR,
    is_transient_status,
)


@dataclass(frozen=True)
class FieldError:
    """
    A single error entry reported by the service.

    :param message: Human-readable error text.
    :type message: str
    :param column: Column the error refers to, when the service names one.
    :type column: str | None
    """

    message: str
    column: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.column}: {self.message}" if self.column else self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"column": self.column, "message": self.message}


class TeamDeskError(Exception):
    """
    Base structured error for the TeamDesk SDK.

    Also used directly for statuses with no dedicated subclass and for
    transport-level failures, in which case ``status_code`` is ``None``.

    :param message: Self-contained, human-readable description.
    :type message: str
    :param status_code: HTTP status, if a response was received.
    :type status_code: int | None
    :param url: Request URL with any embedded credentials redacted.
    :type url: str | None
    :param errors: Structured per-column errors reported by the service.
    :type errors: list[FieldError] | None
    :param subcode: Finer grained code, e.g. ``"http_418"`` or ``"transport_failure"``.
    :type subcode: str | None
    :param is_transient: Whether retrying the same request may succeed. Derived
        from ``status_code`` (429 or 5xx) when omitted.
    :type is_transient: bool | None
    """

    code: str = REQUEST_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        errors: Optional[Sequence[FieldError]] = None,
        subcode: Optional[str] = None,
        is_transient: Optional[bool] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url
        self.errors: List[FieldError] = list(errors or [])
        self.subcode = subcode
        if is_transient is None:
            is_transient = status_code is not None and is_transient_status(status_code)
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "url": self.url,
            "errors": [e.to_dict() for e in self.errors],
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"{self.__class__.__name__}(code={self.code!r}, status_code={self.status_code!r}, "
            f"message={self.message!r})"
        )


class AuthenticationError(TeamDeskError):
    """Credentials were rejected (401) or lack permission (403)."""

    code = AUTHENTICATION_ERROR


class NotFoundError(TeamDeskError):
    """The application, table, view or record does not exist (404)."""

    code = NOT_FOUND

    def __init__(self, message: str, *, url: Optional[str] = None, subcode: Optional[str] = None) -> None:
        super().__init__(message, status_code=404, url=url, subcode=subcode)


class RateLimitError(TeamDeskError):
    """
    The service throttled the request (429).

    :param retry_after: Seconds to wait before retrying, from the ``Retry-After``
        header. ``None`` when the header was absent or not an integer.
    :type retry_after: int | None
    """

    code = RATE_LIMIT

    def __init__(
        self,
        message: str,
        *,
        retry_after: Optional[int] = None,
        url: Optional[str] = None,
        subcode: Optional[str] = None,
    ) -> None:
        super().__init__(message, status_code=429, url=url, subcode=subcode)
        self.retry_after = retry_after

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["retry_after"] = self.retry_after
        return d


class ValidationError(TeamDeskError):
    """The request was rejected as invalid (400 / 422); see ``errors``."""

    code = VALIDATION_ERROR


class ServerError(TeamDeskError):
    """The service failed to process the request (5xx)."""

    code = SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        subcode: Optional[str] = None,
    ) -> None:
        super().__init__(message, status_code=status_code, url=url, subcode=subcode)


__all__ = [
    "FieldError",
    "TeamDeskError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
    "ServerError",
]
