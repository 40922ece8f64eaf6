from typing import cast

from fastapi import Request
from redis.asyncio import Redis

from src.core.errors.exceptions import InfrastructureException


async def get_redis_client(request: Request) -> Redis:
    redis_client = getattr(request.app.state, "redis_client", None)
    if redis_client is None:
        raise InfrastructureException(
            "Session store is not connected",
            additional_info={"hint": "application lifespan did not run"},
        )
    return cast(Redis, redis_client)
