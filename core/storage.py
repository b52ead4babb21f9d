"""Key-value persistence backends for the card counter."""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

import redis

logger = logging.getLogger(__name__)


class StorageUnavailable(Exception):
    """The persistence medium cannot be read or written."""


class KeyValueStore(ABC):
    """Abstract string key-value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get the value stored under key, or None."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, overwriting any prior value."""
        ...


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store for tests and storage-less sessions."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileKeyValueStore(KeyValueStore):
    """
    Store all keys in a single JSON object on disk.

    Writes go to a temporary sibling file which then replaces the live one,
    so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Return the backing file path."""
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageUnavailable(f"Cannot read {self._path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable storage file %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot write {self._path}: {exc}") from exc

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)


class RedisKeyValueStore(KeyValueStore):
    """Redis-backed store."""

    def __init__(self, redis_client: redis.Redis, prefix: str = "card_counter:") -> None:
        self._redis = redis_client
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "card_counter:") -> "RedisKeyValueStore":
        """Connect to Redis at url."""
        return cls(redis.Redis.from_url(url, decode_responses=True), prefix=prefix)

    def _key(self, key: str) -> str:
        """Get Redis key for a logical key."""
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            value = self._redis.get(self._key(key))
        except redis.RedisError as exc:
            raise StorageUnavailable(f"Redis read failed: {exc}") from exc
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.set(self._key(key), value)
        except redis.RedisError as exc:
            raise StorageUnavailable(f"Redis write failed: {exc}") from exc


def create_store(
    backend: str,
    path: str | Path | None = None,
    redis_url: str | None = None,
) -> KeyValueStore:
    """
    Create a store for a configured backend name.

    Args:
        backend: One of "file", "redis" or "memory"
        path: File path for the "file" backend
        redis_url: Connection URL for the "redis" backend

    Returns:
        The configured store
    """
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "file":
        if path is None:
            raise ValueError("File storage requires a path")
        return FileKeyValueStore(path)
    if backend == "redis":
        if redis_url is None:
            raise ValueError("Redis storage requires a URL")
        return RedisKeyValueStore.from_url(redis_url)
    raise ValueError(f"Unknown storage backend: {backend}")
