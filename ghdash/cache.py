"""
Namespaced time-boxed cache on top of a KeyValueStore.

Entries are stored as ``{"data": ..., "timestamp": <epoch ms>}`` under a
fixed key prefix. Expiry is lazy: a stale entry is only removed when read.
The cache is best effort. Read problems are misses and write problems are
logged and dropped.
"""

import json
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from ghdash.exceptions import StoreError
from ghdash.logging import get_logger, log_cache_operation
from ghdash.storage import KeyValueStore

CACHE_TTL = timedelta(minutes=5)
CACHE_PREFIX = "ghdash_cache_"

_logger = get_logger("cache")


def user_key(username: str) -> str:
    return f"user_{username}"


def repos_key(username: str) -> str:
    return f"repos_{username}"


def events_key(username: str) -> str:
    return f"events_{username}"


def contributions_key(username: str) -> str:
    return f"contrib_{username}"


class TTLCache:
    """
    Cache whose entries expire a fixed time after they were written.

    Example:
        ```python
        from ghdash.cache import TTLCache, user_key
        from ghdash.storage import MemoryStore

        cache = TTLCache(MemoryStore())
        cache.set(user_key("octocat"), {"login": "octocat"})
        cache.get(user_key("octocat"))  # {"login": "octocat"}
        ```
    """

    def __init__(
        self,
        store: KeyValueStore,
        prefix: str = CACHE_PREFIX,
        ttl: timedelta = CACHE_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            store: Backing store shared with other namespaces
            prefix: Namespace prepended to every logical key
            ttl: Maximum entry age
            clock: Returns the current time in epoch seconds
        """
        if not prefix:
            raise ValueError("cache prefix must not be empty")
        self.store = store
        self.prefix = prefix
        self.ttl = ttl
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _read_entry(self, key: str) -> dict[str, Any] | None:
        try:
            raw = self.store.get_item(self.prefix + key)
        except StoreError as e:
            _logger.warning("Cache read failed for %s: %s", key, e.message)
            return None

        if raw is None:
            return None

        try:
            entry = json.loads(raw)
        except ValueError:
            log_cache_operation("malformed", key)
            return None

        if (
            not isinstance(entry, dict)
            or "data" not in entry
            or isinstance(entry.get("timestamp"), bool)
            or not isinstance(entry.get("timestamp"), (int, float))
        ):
            log_cache_operation("malformed", key)
            return None

        return entry

    def get(self, key: str) -> Any:
        """
        Return the cached payload, or None when absent, expired or unreadable.

        An expired entry is removed from the store as a side effect.
        """
        entry = self._read_entry(key)
        if entry is None:
            log_cache_operation("miss", key)
            return None

        age_ms = self._now_ms() - entry["timestamp"]
        if age_ms > self.ttl.total_seconds() * 1000:
            log_cache_operation("evict", key, f"age={age_ms}ms")
            try:
                self.store.remove_item(self.prefix + key)
            except StoreError as e:
                _logger.warning("Cache eviction failed for %s: %s", key, e.message)
            return None

        log_cache_operation("hit", key, f"age={age_ms}ms")
        return entry["data"]

    def set(self, key: str, data: Any) -> None:
        """Store a payload stamped with the current time."""
        try:
            raw = json.dumps({"data": data, "timestamp": self._now_ms()})
            self.store.set_item(self.prefix + key, raw)
        except (TypeError, ValueError) as e:
            _logger.warning("Payload for %s is not serializable: %s", key, e)
            return
        except StoreError as e:
            _logger.warning("Cache write dropped for %s: %s", key, e.message)
            return

        log_cache_operation("set", key)

    def get_timestamp(self, key: str) -> datetime | None:
        """Return when the entry was written (UTC), ignoring expiry."""
        entry = self._read_entry(key)
        if entry is None:
            return None
        return datetime.fromtimestamp(entry["timestamp"] / 1000, tz=timezone.utc)

    def clear(self) -> int:
        """
        Remove every entry in this cache's namespace.

        Keys outside the prefix are left untouched.

        Returns:
            Number of entries removed
        """
        try:
            keys = [k for k in self.store.keys() if k.startswith(self.prefix)]
            for k in keys:
                self.store.remove_item(k)
        except StoreError as e:
            _logger.warning("Cache clear failed: %s", e.message)
            return 0

        log_cache_operation("clear", self.prefix, f"removed={len(keys)}")
        return len(keys)


__all__ = [
    "CACHE_TTL",
    "CACHE_PREFIX",
    "TTLCache",
    "user_key",
    "repos_key",
    "events_key",
    "contributions_key",
]
