# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.

"""
Disk snapshots with fetch-or-fallback semantics.

Meant for build pipelines (static site generators and the like) that should
keep working from the last good data when the API is unreachable:

    result = fetch_with_cache("./_tdcache", "orders",
                              lambda: client.table("Orders").select().execute())
    if result.from_cache:
        print(f"Using cached data ({result.cache_age:.1f} min old)")

One JSON file per key, ``{cache_dir}/{key}.json``. Writes go through a
temporary file and an atomic rename, so a key holds either the previous or the
new snapshot, never a partial one. Concurrent writers on the same key are not
coordinated: the last rename wins.
"""

from __future__ import annotations

import dataclasses
import datetime as _dt
import json
import logging
import os
import shutil
import tempfile
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheInfo:
    """
    Age of a cache entry.

    :param age_minutes: Minutes since the snapshot was written.
    :type age_minutes: float
    :param modified_at: Write time of the snapshot (UTC).
    :type modified_at: datetime.datetime
    """

    age_minutes: float
    modified_at: _dt.datetime


@dataclass(frozen=True)
class CachedResult(Generic[T]):
    """
    Result of :func:`fetch_with_cache`.

    :param data: Fresh data, or the snapshot when ``from_cache`` is true.
        Snapshots come back as plain JSON values (records as row dicts).
    :param from_cache: Whether the live fetch failed and a snapshot was served.
    :type from_cache: bool
    :param cache_age: Snapshot age in minutes; ``None`` for fresh data.
    :type cache_age: float | None
    """

    data: T
    from_cache: bool
    cache_age: Optional[float] = None


def _cache_path(cache_dir: str, key: str) -> str:
    if not isinstance(key, str) or not key.strip():
        raise ValueError("cache key must be a non-empty string")
    if "/" in key or "\\" in key or key in (".", ".."):
        raise ValueError(f"cache key must not contain path separators: {key!r}")
    return os.path.join(cache_dir, f"{key}.json")


def _to_jsonable(value: Any) -> Any:
    to_api_dict = getattr(value, "to_api_dict", None)
    if callable(to_api_dict):
        return to_api_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def save_to_cache(cache_dir: str, key: str, data: Any) -> None:
    """
    Write ``data`` as the snapshot for ``key``, creating ``cache_dir`` if needed.

    :raises TypeError: If ``data`` cannot be serialized to JSON.
    :raises OSError: If the directory or file cannot be written.
    """
    path = _cache_path(cache_dir, key)
    payload = json.dumps(data, default=_to_jsonable, indent=2, ensure_ascii=False)
    os.makedirs(cache_dir, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=cache_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def load_from_cache(cache_dir: str, key: str) -> Optional[Any]:
    """
    Read the snapshot for ``key``.

    :return: The stored value, or ``None`` if the entry is missing or unreadable.
    """
    path = _cache_path(cache_dir, key)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        _logger.debug("Ignoring unreadable cache entry %s: %s", path, exc)
        return None


def get_cache_info(cache_dir: str, key: str) -> Optional[CacheInfo]:
    """Return the age of the snapshot for ``key``, or ``None`` if there is none."""
    path = _cache_path(cache_dir, key)
    try:
        mtime = os.stat(path).st_mtime
    except OSError:
        return None
    age_minutes = max(0.0, (time.time() - mtime) / 60.0)
    return CacheInfo(
        age_minutes=age_minutes,
        modified_at=_dt.datetime.fromtimestamp(mtime, tz=_dt.timezone.utc),
    )


def clear_cache(cache_dir: str) -> None:
    """Remove ``cache_dir`` and every snapshot in it. A missing directory is not an error."""
    try:
        shutil.rmtree(cache_dir)
    except FileNotFoundError:
        pass


def fetch_with_cache(
    cache_dir: str,
    key: str,
    fetcher: Callable[[], T],
    *,
    strict_writes: bool = False,
) -> CachedResult[T]:
    """
    Call ``fetcher``; persist its result on success, fall back to the snapshot on failure.

    - Success: the result is saved under ``key`` (replacing any earlier
      snapshot) and returned with ``from_cache=False``. A failure to save is
      logged and the fresh data is still returned, unless ``strict_writes``.
    - Failure with a snapshot: the snapshot is returned with ``from_cache=True``
      and its age in minutes.
    - Failure without a snapshot: the original exception is re-raised unchanged.

    :param cache_dir: Directory holding snapshots.
    :type cache_dir: str
    :param key: Snapshot name (file name without ``.json``).
    :type key: str
    :param fetcher: Zero-argument callable performing the live fetch.
    :param strict_writes: Re-raise errors from saving the snapshot.
    :type strict_writes: bool
    :rtype: CachedResult
    """
    # Reject bad keys before calling out
    _cache_path(cache_dir, key)
    try:
        data = fetcher()
    except Exception as exc:
        cached = load_from_cache(cache_dir, key)
        if cached is None:
            raise
        info = get_cache_info(cache_dir, key)
        age = info.age_minutes if info is not None else None
        _logger.warning(
            "Fetch for cache key %r failed (%s); serving snapshot%s",
            key,
            exc,
            f" ({age:.1f} min old)" if age is not None else "",
        )
        return CachedResult(data=cached, from_cache=True, cache_age=age)

    try:
        save_to_cache(cache_dir, key, data)
    except (OSError, TypeError, ValueError) as exc:
        if strict_writes:
            raise
        _logger.warning("Could not write cache entry %r: %s", key, exc)
    return CachedResult(data=data, from_cache=False)


__all__ = [
    "CacheInfo",
    "CachedResult",
    "save_to_cache",
    "load_from_cache",
    "get_cache_info",
    "clear_cache",
    "fetch_with_cache",
]
