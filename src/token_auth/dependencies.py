import hmac

from fastapi import Depends, Security
from fastapi.security.api_key import APIKeyHeader
from redis.asyncio import Redis

from src.core.errors.exceptions import AccessForbiddenException, UnauthorizedException
from src.core.redis.dependencies import get_redis_client
from src.main.config import config
from src.token_auth.claims import Claims
from src.token_auth.engine import TokenEngine
from src.token_auth.settings import build_token_engine
from src.token_auth.store import RedisSessionStore

access_token_header = APIKeyHeader(
    name="Authorization", scheme_name="access-token", auto_error=False
)
issuer_key_header = APIKeyHeader(
    name="X-Issuer-Key", scheme_name="issuer-key", auto_error=False
)


def get_token_engine(redis_client: Redis = Depends(get_redis_client)) -> TokenEngine:
    return build_token_engine(config.jwt, RedisSessionStore(redis_client))


async def get_current_claims(
    token: str | None = Security(access_token_header),
    engine: TokenEngine = Depends(get_token_engine),
) -> Claims:
    """
    Verify the bearer token from the Authorization header.

    Returns:
        Claims: The verified token claims

    Raises:
        UnauthorizedException: If the header is missing
        TokenException: If verification fails
    """
    if not token:
        raise UnauthorizedException("Authentication token not found")

    if token.lower().startswith("bearer "):
        token = token[7:].strip()

    return await engine.verify(token)


async def require_issuer_key(
    issuer_key: str | None = Security(issuer_key_header),
) -> None:
    """Only callers holding the shared issuer key may mint tokens."""
    expected = config.jwt.JWT_ISSUER_API_KEY
    if not expected:
        raise AccessForbiddenException("Token issuance is disabled")
    if not issuer_key or not hmac.compare_digest(
        issuer_key.encode("utf-8"), expected.encode("utf-8")
    ):
        raise AccessForbiddenException("Invalid issuer key")
