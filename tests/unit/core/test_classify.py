# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

import pytest

from teamdesk_sdk.core._classify import classify_error, parse_error_response, parse_retry_after
from teamdesk_sdk.core._error_codes import (
    AUTHENTICATION_ERROR,
    HTTP_400,
    HTTP_404,
    HTTP_429,
    HTTP_503,
    NOT_FOUND,
    RATE_LIMIT,
    REQUEST_ERROR,
    SERVER_ERROR,
    VALIDATION_ERROR,
)
from teamdesk_sdk.core.errors import (
    AuthenticationError,
    FieldError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TeamDeskError,
    ValidationError,
)


@pytest.mark.parametrize(
    "status,cls,code",
    [
        (401, AuthenticationError, AUTHENTICATION_ERROR),
        (403, AuthenticationError, AUTHENTICATION_ERROR),
        (404, NotFoundError, NOT_FOUND),
        (429, RateLimitError, RATE_LIMIT),
        (400, ValidationError, VALIDATION_ERROR),
        (422, ValidationError, VALIDATION_ERROR),
        (500, ServerError, SERVER_ERROR),
        (502, ServerError, SERVER_ERROR),
        (503, ServerError, SERVER_ERROR),
        (599, ServerError, SERVER_ERROR),
    ],
)
def test_status_maps_to_error_kind(status, cls, code):
    err = classify_error(status, {"message": "boom"})
    assert type(err) is cls
    assert err.code == code
    assert err.status_code == status
    assert err.subcode == f"http_{status}"


@pytest.mark.parametrize("status", [402, 405, 409, 418, 451])
def test_unlisted_status_is_generic(status):
    err = classify_error(status, {"message": "nope"})
    assert type(err) is TeamDeskError
    assert err.code == REQUEST_ERROR
    assert err.status_code == status
    assert err.message == "Request failed: nope"


def test_rate_limit_reads_retry_after():
    err = classify_error(429, {"message": "Too many requests"}, headers={"Retry-After": "60"})
    assert isinstance(err, RateLimitError)
    assert err.retry_after == 60
    assert err.is_transient
    assert err.subcode == HTTP_429
    assert err.message == "Rate limit exceeded: Too many requests"


def test_rate_limit_without_header():
    err = classify_error(429, None)
    assert err.retry_after is None
    assert err.message == "Rate limit exceeded: HTTP 429"


def test_validation_errors_keep_service_order():
    body = {
        "errors": [
            {"column": "Email", "message": "Invalid email format"},
            {"column": "Phone", "message": "Required"},
        ]
    }
    err = classify_error(400, body, url="https://td.example/1/***/Contacts/create.json")
    assert isinstance(err, ValidationError)
    assert err.errors == [
        FieldError("Invalid email format", "Email"),
        FieldError("Required", "Phone"),
    ]
    assert err.message == "Validation failed: Email: Invalid email format; Phone: Required"
    assert err.subcode == HTTP_400
    assert err.url == "https://td.example/1/***/Contacts/create.json"


def test_not_found_message_and_subcode():
    err = classify_error(404, {"message": "Table 'Ordrs' not found"})
    assert err.message == "Resource not found: Table 'Ordrs' not found"
    assert err.subcode == HTTP_404
    assert not err.is_transient


def test_server_error_is_transient():
    err = classify_error(503, "Service Unavailable")
    assert isinstance(err, ServerError)
    assert err.is_transient
    assert err.subcode == HTTP_503
    assert err.message == "Server error: Service Unavailable"


def test_authentication_prefix():
    err = classify_error(401, {"error": {"message": "Invalid token"}})
    assert err.message == "Authentication failed: Invalid token"


@pytest.mark.parametrize("body", [None, "", "   ", 42, [], {}, {"errors": []}, {"message": None}, {"unrelated": 1}])
def test_unusable_bodies_fall_back_to_status_line(body):
    err = classify_error(500, body, reason="Internal Server Error")
    assert isinstance(err, ServerError)
    assert err.message == "Server error: HTTP 500 Internal Server Error"


def test_never_raises_on_hostile_body():
    class Hostile:
        def __str__(self):
            raise RuntimeError("no")

    err = classify_error(400, {"message": Hostile()})
    assert isinstance(err, ValidationError)
    assert err.message == "Validation failed: HTTP 400"


def test_parse_error_response_shapes():
    assert parse_error_response("plain text") == ("plain text", [FieldError("plain text")])
    assert parse_error_response({"message": "m"}) == ("m", [FieldError("m")])
    assert parse_error_response({"error": {"message": "nested"}}) == ("nested", [FieldError("nested")])
    message, errors = parse_error_response({"errors": [{"message": "no column"}, "bare"]})
    assert message == "no column; bare"
    assert errors == [FieldError("no column"), FieldError("bare")]
    assert parse_error_response(None) == (None, [])


@pytest.mark.parametrize(
    "headers,expected",
    [
        ({"Retry-After": "30"}, 30),
        ({"retry-after": "5"}, 5),
        ({"RETRY-AFTER": 0}, 0),
        ({"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"}, None),
        ({"Retry-After": "-3"}, None),
        ({"Retry-After": "1.5"}, None),
        ({}, None),
        (None, None),
    ],
)
def test_parse_retry_after(headers, expected):
    assert parse_retry_after(headers) == expected
