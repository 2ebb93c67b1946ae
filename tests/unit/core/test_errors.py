# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""Unit tests for the TeamDeskError hierarchy."""

import unittest

from teamdesk_sdk.core._error_codes import TRANSPORT_FAILURE, is_transient_status
from teamdesk_sdk.core.errors import (
    FieldError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TeamDeskError,
    ValidationError,
)


class TestTeamDeskError(unittest.TestCase):
    """Tests for the base error and its subclasses."""

    def test_base_error_defaults(self):
        err = TeamDeskError("connection reset", subcode=TRANSPORT_FAILURE)
        self.assertEqual(str(err), "connection reset")
        self.assertIsNone(err.status_code)
        self.assertEqual(err.errors, [])
        self.assertFalse(err.is_transient)
        self.assertTrue(err.timestamp.endswith("Z"))

    def test_to_dict(self):
        err = ValidationError(
            "Validation failed: Email: bad",
            status_code=400,
            url="https://td.example/1/***/T/create.json",
            errors=[FieldError("bad", "Email")],
            subcode="http_400",
        )
        d = err.to_dict()
        self.assertEqual(d["code"], "validation_error")
        self.assertEqual(d["status_code"], 400)
        self.assertEqual(d["errors"], [{"column": "Email", "message": "bad"}])
        self.assertEqual(d["url"], "https://td.example/1/***/T/create.json")

    def test_rate_limit_to_dict_includes_retry_after(self):
        err = RateLimitError("Rate limit exceeded: slow down", retry_after=12)
        self.assertEqual(err.status_code, 429)
        self.assertEqual(err.to_dict()["retry_after"], 12)

    def test_subclasses_are_catchable_as_base(self):
        for err in (NotFoundError("x"), RateLimitError("x"), ServerError("x", status_code=500)):
            with self.assertRaises(TeamDeskError):
                raise err

    def test_field_error_str(self):
        self.assertEqual(str(FieldError("Required", "Phone")), "Phone: Required")
        self.assertEqual(str(FieldError("Something broke")), "Something broke")

    def test_is_transient_status(self):
        self.assertTrue(is_transient_status(429))
        self.assertTrue(is_transient_status(503))
        self.assertFalse(is_transient_status(404))
        self.assertFalse(is_transient_status(400))

    def test_is_transient_follows_status_code(self):
        self.assertTrue(TeamDeskError("x", status_code=503).is_transient)
        self.assertTrue(TeamDeskError("x", status_code=429).is_transient)
        self.assertFalse(TeamDeskError("x", status_code=409).is_transient)
        self.assertFalse(TeamDeskError("x").is_transient)
        self.assertTrue(RateLimitError("x").is_transient)
        self.assertTrue(ServerError("x", status_code=502).is_transient)
        self.assertFalse(NotFoundError("x").is_transient)

    def test_explicit_is_transient_wins(self):
        self.assertTrue(TeamDeskError("reset", subcode=TRANSPORT_FAILURE, is_transient=True).is_transient)
        self.assertFalse(TeamDeskError("x", status_code=503, is_transient=False).is_transient)


if __name__ == "__main__":
    unittest.main()
