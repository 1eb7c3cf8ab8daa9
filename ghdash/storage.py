"""
Flat key-value stores backing the cache and the persisted settings.

Values are opaque strings. Every store can enumerate its keys so callers
can scope operations to a prefix.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from ghdash.exceptions import ConfigurationError, StoreError, StoreFullError

ENCODING = "utf-8"
DEFAULT_STORE_PATH = Path("~/.cache/ghdash/store.json")


class KeyValueStore(ABC):
    """Synchronous string-to-string store with enumerable keys."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value.

        Raises:
            StoreFullError: If the write would exceed the store's capacity
            StoreError: If the store cannot be written
        """

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return a snapshot of all stored keys."""


class MemoryStore(KeyValueStore):
    """Dict-backed store with an optional entry limit."""

    def __init__(self, max_entries: int | None = None) -> None:
        self.max_entries = max_entries
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if (
            self.max_entries is not None
            and key not in self._items
            and len(self._items) >= self.max_entries
        ):
            raise StoreFullError(f"Store is full ({self.max_entries} entries)")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class JsonFileStore(KeyValueStore):
    """
    Store persisted as a single JSON object on disk.

    The file is re-read on every operation so several processes sharing one
    file see each other's writes. A missing or corrupt file reads as empty.
    Writes land in a temporary sibling file that then replaces the original.
    """

    def __init__(self, path: str | Path, max_bytes: int | None = None) -> None:
        """
        Args:
            path: Location of the JSON document
            max_bytes: Optional quota for the serialized document
        """
        self.path = Path(path).expanduser()
        self.max_bytes = max_bytes

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._write(data)

    def keys(self) -> list[str]:
        return list(self._load())

    def _load(self) -> dict[str, str]:
        try:
            with self.path.open(encoding=ENCODING) as fh:
                data = json.load(fh)
        except (FileNotFoundError, ValueError):
            return {}
        except OSError as e:
            raise StoreError(f"Failed to read store: {e!s}") from e

        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        document = json.dumps(data, indent=2, sort_keys=False)
        size = len(document.encode(ENCODING))
        if self.max_bytes is not None and size > self.max_bytes:
            raise StoreFullError(
                f"Store quota exceeded ({size} > {self.max_bytes} bytes)"
            )

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding=ENCODING) as fh:
                    fh.write(document)
                Path(tmp_name).replace(self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreError(f"Failed to write store: {e!s}") from e


def store_from_env() -> JsonFileStore:
    """
    Create the on-disk store from environment variables.

    Environment variables:
        GHDASH_CACHE_FILE: Store location (optional, default: DEFAULT_STORE_PATH)
        GHDASH_CACHE_MAX_BYTES: Quota for the store document (optional)

    Raises:
        ConfigurationError: If GHDASH_CACHE_MAX_BYTES is not a positive integer
    """
    path = os.environ.get("GHDASH_CACHE_FILE") or DEFAULT_STORE_PATH
    max_bytes_raw = os.environ.get("GHDASH_CACHE_MAX_BYTES")

    max_bytes = None
    if max_bytes_raw:
        try:
            max_bytes = int(max_bytes_raw)
        except ValueError:
            raise ConfigurationError(
                f"Invalid GHDASH_CACHE_MAX_BYTES: {max_bytes_raw!r}. Must be an integer"
            ) from None
        if max_bytes <= 0:
            raise ConfigurationError("GHDASH_CACHE_MAX_BYTES must be positive")

    return JsonFileStore(path, max_bytes=max_bytes)


__all__ = [
    "DEFAULT_STORE_PATH",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "store_from_env",
]
