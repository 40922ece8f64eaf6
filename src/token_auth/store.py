from typing import Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from loggers import get_logger
from src.token_auth.exceptions import StoreUnavailableException

logger = get_logger(__name__)


class SessionStore(Protocol):
    """Key-value store holding the whitelist entry of each subject."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool: ...


class RedisSessionStore:
    def __init__(self, redis_client: Redis) -> None:
        self._redis = redis_client

    async def get(self, key: str) -> str | None:
        try:
            value = await self._redis.get(key)
        except RedisError as exc:
            logger.error("Session store read failed for %s: %s", key, exc)
            raise StoreUnavailableException(additional_info={"key": key}) from exc

        if isinstance(value, (bytes, bytearray)):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        try:
            result = await self._redis.set(key, value, ex=ttl)
        except RedisError as exc:
            logger.error("Session store write failed for %s: %s", key, exc)
            raise StoreUnavailableException(additional_info={"key": key}) from exc
        return bool(result)
