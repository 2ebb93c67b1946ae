# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Core infrastructure components for the TeamDesk SDK.

This module contains the foundational components including authentication,
configuration, HTTP client, error classification and the disk cache.
"""

from .errors import (
    AuthenticationError,
    FieldError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TeamDeskError,
    ValidationError,
)

__all__ = [
    "TeamDeskError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
    "ServerError",
    "FieldError",
]
