"""Small key-value stores for dashboard-local state (filters, reviewer session).

Values are strings; callers serialise JSON themselves. Two backends:
JsonFileStore (one JSON object on disk) and RedisStore.
"""
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional, Protocol

import redis

from streamlit_ui.utils.config import get_redis_url, get_store_backend, get_store_path

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> bool: ...

    def delete(self, key: str) -> bool: ...


class JsonFileStore:
    """All keys in a single JSON file, rewritten atomically on every change."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            logger.warning(f"Store file {self.path} unreadable, starting empty: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, self.path)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> bool:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            data = self._read()
            if key not in data:
                return False
            del data[key]
            self._write(data)
        return True


class RedisStore:
    """Redis-backed store; keys are namespaced with a prefix."""

    def __init__(self, client: redis.Redis, prefix: str = "pitchdeck_review"):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "pitchdeck_review") -> "RedisStore":
        return cls(redis.Redis.from_url(url, decode_responses=True), prefix=prefix)

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.client.get(self._key(key))
        except redis.RedisError as e:
            logger.warning(f"Store get error for {key}: {e}")
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> bool:
        try:
            self.client.set(self._key(key), value)
            return True
        except redis.RedisError as e:
            logger.warning(f"Store set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        try:
            return bool(self.client.delete(self._key(key)))
        except redis.RedisError as e:
            logger.warning(f"Store delete error for {key}: {e}")
            return False


_store: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    """Get or create the configured store singleton."""
    global _store
    if _store is None:
        if get_store_backend() == "redis":
            _store = RedisStore.from_url(get_redis_url())
        else:
            _store = JsonFileStore(get_store_path())
    return _store
