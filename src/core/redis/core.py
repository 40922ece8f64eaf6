from typing import cast

from redis.asyncio import Redis

from src.main.config import RedisConfig


def create_redis_client(redis_config: RedisConfig) -> Redis:
    """
    Build the async client behind the session store.

    Responses are decoded to ``str`` so stored jti values compare directly
    against token claims.
    """
    client = Redis.from_url(
        redis_config.dsn,
        decode_responses=True,
        socket_timeout=redis_config.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=redis_config.REDIS_SOCKET_TIMEOUT,
    )
    return cast(Redis, client)
