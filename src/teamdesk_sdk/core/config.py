# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "https://www.teamdesk.net/secure/api/v2"
DEFAULT_CACHE_DIR = "./_tdcache"

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class TeamDeskConfig:
    """
    Configuration settings for TeamDesk client operations.

    Credentials are passed to :class:`~teamdesk_sdk.client.TeamDeskClient`
    directly and are deliberately not part of this object, so a config can be
    logged or shared without leaking secrets.

    :param base_url: API root, without the application id. Use
        ``"https://pro.dbflex.net/secure/api/v2"`` for DBFlex.
    :type base_url: str
    :param use_bearer_auth: Send the token in an ``Authorization: Bearer`` header
        instead of embedding it in the URL path. Requires a token.
    :type use_bearer_auth: bool
    :param cache_dir: Directory used by :meth:`TeamDeskClient.fetch_with_cache`.
        ``None`` disables client-level caching.
    :type cache_dir: str or None
    :param debug: Log every request and response summary at DEBUG level.
    :type debug: bool
    :param logger_name: Name of the :mod:`logging` logger the SDK writes to.
    :type logger_name: str
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param strict_cache_writes: Re-raise cache write failures instead of logging them.
    :type strict_cache_writes: bool
    """

    base_url: str = DEFAULT_BASE_URL
    use_bearer_auth: bool = False
    cache_dir: Optional[str] = DEFAULT_CACHE_DIR
    debug: bool = False
    logger_name: str = "teamdesk_sdk"
    http_timeout: Optional[float] = None
    strict_cache_writes: bool = False

    @classmethod
    def from_env(cls) -> "TeamDeskConfig":
        """
        Create a configuration instance from ``TEAMDESK_*`` environment variables.

        Recognised variables: ``TEAMDESK_BASE_URL``, ``TEAMDESK_BEARER_AUTH``,
        ``TEAMDESK_CACHE_DIR`` (empty string disables caching), ``TEAMDESK_DEBUG``
        and ``TEAMDESK_HTTP_TIMEOUT``. Unset variables fall back to the defaults.

        :return: Configuration instance.
        :rtype: ~teamdesk_sdk.core.config.TeamDeskConfig
        :raises ValueError: If ``TEAMDESK_HTTP_TIMEOUT`` is not a number.
        """
        cache_dir: Optional[str] = os.environ.get("TEAMDESK_CACHE_DIR", DEFAULT_CACHE_DIR)
        if cache_dir is not None and not cache_dir.strip():
            cache_dir = None

        timeout_raw = os.environ.get("TEAMDESK_HTTP_TIMEOUT")
        http_timeout: Optional[float] = None
        if timeout_raw and timeout_raw.strip():
            try:
                http_timeout = float(timeout_raw)
            except ValueError:
                raise ValueError(f"TEAMDESK_HTTP_TIMEOUT must be a number, got {timeout_raw!r}") from None

        return cls(
            base_url=os.environ.get("TEAMDESK_BASE_URL") or DEFAULT_BASE_URL,
            use_bearer_auth=_env_flag("TEAMDESK_BEARER_AUTH", False),
            cache_dir=cache_dir,
            debug=_env_flag("TEAMDESK_DEBUG", False),
            http_timeout=http_timeout,
        )
