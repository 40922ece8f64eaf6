from fastapi import APIRouter, Depends
from redis.asyncio import Redis

from src.core.redis.dependencies import get_redis_client
from src.core.schemas import Base
from src.main.config import config

router = APIRouter()


class HealthResponse(Base):
    status: str = "ok"
    store: str = "ok"
    version: str


@router.get("/health/", response_model=HealthResponse)
@router.head("/health/", include_in_schema=False)
async def check_health(
    redis_client: Redis = Depends(get_redis_client),
) -> HealthResponse:
    # A failed ping surfaces as a 503 through the store error middleware
    await redis_client.ping()
    return HealthResponse(version=config.app.VERSION)
