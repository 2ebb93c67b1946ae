# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Mapping of failed HTTP responses onto the :mod:`~teamdesk_sdk.core.errors` hierarchy.

:func:`classify_error` is a pure function of the status code, the parsed body
and the response headers. It never raises: bodies it cannot make sense of
degrade to a message synthesised from the status line.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from ._error_codes import (
    AUTHENTICATION_STATUSES,
    VALIDATION_STATUSES,
    http_subcode,
)
from .errors import (
    AuthenticationError,
    FieldError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TeamDeskError,
    ValidationError,
)


def _field_error_from(item: Any) -> FieldError:
    if isinstance(item, dict):
        column = item.get("column")
        message = item.get("message")
        return FieldError(
            message=str(message) if message is not None else "Unknown error",
            column=str(column) if column is not None else None,
        )
    return FieldError(message=str(item))


def parse_error_response(body: Any) -> Tuple[Optional[str], List[FieldError]]:
    """
    Extract a message and per-column errors from an error response body.

    Recognised shapes, in priority order:

    1. ``{"errors": [{"column": "Email", "message": "..."}, ...]}`` - the message
       joins every entry as ``column: message`` (or the bare message) with
       ``"; "``, preserving the order the service returned them in.
    2. ``{"message": "..."}`` or ``{"error": {"message": "..."}}``.
    3. A bare string, used verbatim.

    :param body: Parsed JSON body, raw text, or ``None``.
    :return: ``(message, errors)``; ``message`` is ``None`` when nothing usable
        was found so the caller can fall back to the status line.
    :rtype: tuple[str | None, list[FieldError]]
    """
    if isinstance(body, str):
        text = body.strip()
        if not text:
            return None, []
        return text, [FieldError(message=text)]

    if not isinstance(body, dict):
        return None, []

    items = body.get("errors")
    if isinstance(items, list) and items:
        errors = [_field_error_from(item) for item in items]
        return "; ".join(str(e) for e in errors), errors

    message = body.get("message")
    if message is None and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
    if message is not None and str(message).strip():
        text = str(message)
        return text, [FieldError(message=text)]

    return None, []


def _get_header(headers: Optional[Mapping[str, Any]], name: str) -> Optional[Any]:
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, val in headers.items():
        if isinstance(key, str) and key.lower() == lowered:
            return val
    return None


def parse_retry_after(headers: Optional[Mapping[str, Any]]) -> Optional[int]:
    """
    Read a ``Retry-After`` header expressed in whole seconds.

    HTTP-date values and anything else that is not a non-negative integer
    yield ``None``.
    """
    raw = _get_header(headers, "Retry-After")
    if raw is None:
        return None
    try:
        seconds = int(str(raw).strip())
    except (ValueError, TypeError):
        return None
    return seconds if seconds >= 0 else None


def _status_line(status_code: int, reason: Optional[str]) -> str:
    return f"HTTP {status_code} {reason}".strip() if reason else f"HTTP {status_code}"


def classify_error(
    status_code: int,
    body: Any,
    url: Optional[str] = None,
    headers: Optional[Mapping[str, Any]] = None,
    reason: Optional[str] = None,
) -> TeamDeskError:
    """
    Build the typed error for a non-2xx response.

    ========== ======================= ===========================
    Status     Error                   Extra data
    ========== ======================= ===========================
    401, 403   AuthenticationError
    404        NotFoundError
    429        RateLimitError          ``retry_after`` from header
    400, 422   ValidationError         ``errors``
    >= 500     ServerError
    other      TeamDeskError           ``errors`` if any
    ========== ======================= ===========================

    :param status_code: HTTP status code of the response.
    :type status_code: int
    :param body: Parsed JSON body, raw text, or ``None``.
    :param url: Request URL (already redacted) to attach to the error.
    :type url: str | None
    :param headers: Response headers, used for ``Retry-After``.
    :param reason: HTTP reason phrase, used when the body carries no message.
    :type reason: str | None
    :return: Exactly one error instance; never raises.
    :rtype: TeamDeskError
    """
    try:
        message, errors = parse_error_response(body)
    except Exception:  # body objects with hostile __str__ and the like
        message, errors = None, []
    if message is None:
        message = _status_line(status_code, reason)
    subcode = http_subcode(status_code)

    if status_code in AUTHENTICATION_STATUSES:
        return AuthenticationError(
            f"Authentication failed: {message}", status_code=status_code, url=url, subcode=subcode
        )
    if status_code == 404:
        return NotFoundError(f"Resource not found: {message}", url=url, subcode=subcode)
    if status_code == 429:
        return RateLimitError(
            f"Rate limit exceeded: {message}",
            retry_after=parse_retry_after(headers),
            url=url,
            subcode=subcode,
        )
    if status_code in VALIDATION_STATUSES:
        return ValidationError(
            f"Validation failed: {message}",
            status_code=status_code,
            url=url,
            errors=errors,
            subcode=subcode,
        )
    if status_code >= 500:
        return ServerError(f"Server error: {message}", status_code=status_code, url=url, subcode=subcode)
    return TeamDeskError(
        f"Request failed: {message}",
        status_code=status_code,
        url=url,
        errors=errors,
        subcode=subcode,
    )


__all__ = ["classify_error", "parse_error_response", "parse_retry_after"]
