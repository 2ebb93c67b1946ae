# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

# Error code constants (the ``code`` discriminant on every TeamDeskError)
AUTHENTICATION_ERROR = "authentication_error"
NOT_FOUND = "not_found"
RATE_LIMIT = "rate_limit"
VALIDATION_ERROR = "validation_error"
SERVER_ERROR = "server_error"
REQUEST_ERROR = "request_error"

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_404 = "http_404"
HTTP_429 = "http_429"
HTTP_503 = "http_503"

# Subcodes for failures that never produced an HTTP status
TRANSPORT_FAILURE = "transport_failure"
INVALID_RESPONSE = "invalid_response"

AUTHENTICATION_STATUSES = frozenset({401, 403})
VALIDATION_STATUSES = frozenset({400, 422})


def http_subcode(status_code: int) -> str:
    """Return the ``http_<status>`` subcode for a status code."""
    return f"http_{status_code}"


def is_transient_status(status_code: int) -> bool:
    """Whether a caller-side retry policy may reasonably retry this status."""
    return status_code == 429 or status_code >= 500
