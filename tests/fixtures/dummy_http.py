# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Scripted stand-in for the transport's ``_HttpClient``.

``DummyHTTP`` replays a list of ``(status, headers, body)`` responses (or
exceptions to raise) and records every call as ``(method, url, kwargs)``.
"""

import json


class DummyResponse:
    def __init__(self, status, headers=None, body=None, reason=None):
        self.status_code = status
        self.headers = headers or {}
        self.reason = reason
        self._body = body
        if isinstance(body, (dict, list)):
            self.text = json.dumps(body)
        else:
            self.text = body or ""

    def json(self):
        if isinstance(self._body, (dict, list)):
            return self._body
        raise ValueError("non-json")


class DummyHTTP:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self._responses:
            raise AssertionError("No more responses")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return DummyResponse(*item)

    def close(self):
        pass
