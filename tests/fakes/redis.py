from __future__ import annotations

import time
from typing import Any

import redis.exceptions as redis_exc


def _normalize_key(key: str | bytes) -> str:
    if isinstance(key, bytes):
        return key.decode("utf-8")
    return key


def _normalize_value(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _now() -> float:
    return time.monotonic()


class InMemoryRedis:
    """Async stand-in for the session store client (decode_responses=True)."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self._expires: dict[str, float] = {}
        self.fail_with: redis_exc.RedisError | None = None
        self.closed = False

    def _check_available(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _purge_expired(self, key: str) -> None:
        expires_at = self._expires.get(key)
        if expires_at is None:
            return
        if _now() >= expires_at:
            self._store.pop(key, None)
            self._expires.pop(key, None)

    async def get(self, key: str | bytes) -> str | None:
        self._check_available()
        key_norm = _normalize_key(key)
        self._purge_expired(key_norm)
        return self._store.get(key_norm)

    async def set(
        self,
        key: str | bytes,
        value: Any,
        *,
        ex: int | None = None,
        px: int | None = None,
    ) -> bool:
        self._check_available()
        key_norm = _normalize_key(key)
        self._store[key_norm] = _normalize_value(value)
        if ex is not None:
            self._expires[key_norm] = _now() + int(ex)
        elif px is not None:
            self._expires[key_norm] = _now() + (int(px) / 1000)
        else:
            self._expires.pop(key_norm, None)
        return True

    async def delete(self, *keys: str | bytes) -> int:
        self._check_available()
        deleted = 0
        for key in keys:
            key_norm = _normalize_key(key)
            self._purge_expired(key_norm)
            if key_norm in self._store:
                self._store.pop(key_norm, None)
                self._expires.pop(key_norm, None)
                deleted += 1
        return deleted

    async def ttl(self, key: str | bytes) -> int:
        self._check_available()
        key_norm = _normalize_key(key)
        self._purge_expired(key_norm)
        if key_norm not in self._store:
            return -2
        expires_at = self._expires.get(key_norm)
        if expires_at is None:
            return -1
        return max(0, int(expires_at - _now()))

    async def ping(self) -> bool:
        self._check_available()
        return True

    async def aclose(self) -> None:
        self.closed = True
