from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from loggers import get_logger
from src.core.redis.lifecycle import on_redis_shutdown, on_redis_startup
from src.main.config import config
from src.main.sentry import init_sentry
from src.token_auth.settings import build_token_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    init_sentry()

    # Reject a broken token configuration before accepting traffic
    token_settings = build_token_settings(config.jwt)
    if not token_settings.secret_bytes:
        logger.warning("JWT_SECRET_KEY is empty; tokens are signed with an empty key")
    if not config.jwt.JWT_ISSUER_API_KEY:
        logger.warning("JWT_ISSUER_API_KEY is empty; token issuance is disabled")

    await on_redis_startup(app, config.redis)
    logger.info(
        "Token service ready: login_type=%s algorithm=%s ttl=%s",
        token_settings.login_type,
        token_settings.algorithm,
        token_settings.ttl,
    )

    yield

    await on_redis_shutdown(app)
