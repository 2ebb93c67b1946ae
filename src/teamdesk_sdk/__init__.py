# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Python client for the TeamDesk / DBFlex REST API.

Example::

    from teamdesk_sdk import TeamDeskClient

    with TeamDeskClient(12345, token="your-token") as client:
        for page in client.table("Orders").select("Order ID", "Total").select_all():
            print(len(page))
"""

from .client import TeamDeskClient
from .core.cache import CachedResult, clear_cache, fetch_with_cache, get_cache_info, load_from_cache, save_to_cache
from .core.config import TeamDeskConfig
from .core.errors import (
    AuthenticationError,
    FieldError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TeamDeskError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "TeamDeskClient",
    "TeamDeskConfig",
    "TeamDeskError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
    "ServerError",
    "FieldError",
    "CachedResult",
    "fetch_with_cache",
    "save_to_cache",
    "load_from_cache",
    "get_cache_info",
    "clear_cache",
    "__version__",
]
