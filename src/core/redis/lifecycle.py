from fastapi import FastAPI
from redis.exceptions import RedisError

from loggers import get_logger
from src.core.redis.core import create_redis_client
from src.main.config import RedisConfig

logger = get_logger("redis")


async def on_redis_startup(app: FastAPI, redis_config: RedisConfig) -> None:
    """
    Connect the session store and attach the client to app.state.

    Raises:
        RuntimeError: The store does not answer a ping.
    """
    redis_client = create_redis_client(redis_config)
    try:
        answered = await redis_client.ping()
    except RedisError as exc:
        await redis_client.aclose()
        raise RuntimeError(
            f"Session store at {redis_config.safe_dsn} is unreachable"
        ) from exc
    if not answered:
        await redis_client.aclose()
        raise RuntimeError(f"Session store at {redis_config.safe_dsn} did not answer")

    app.state.redis_client = redis_client
    logger.info("Session store connected: %s", redis_config.safe_dsn)


async def on_redis_shutdown(app: FastAPI) -> None:
    redis_client = getattr(app.state, "redis_client", None)
    if redis_client is None:
        return
    await redis_client.aclose()
    app.state.redis_client = None
    logger.info("Session store connection closed.")
