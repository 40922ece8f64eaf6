import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

import src.core.errors.handlers as handlers
import src.core.middleware as middleware
from src.main.config import config
from tests.fakes.redis import InMemoryRedis


@pytest.mark.asyncio
async def test_health_reports_ok(async_client_with_fakes: httpx.AsyncClient) -> None:
    response = await async_client_with_fakes.get("/health/")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "store": "ok",
        "version": config.app.VERSION,
    }

    head_response = await async_client_with_fakes.head("/health/")
    assert head_response.status_code == 200


@pytest.mark.asyncio
async def test_health_reports_store_outage(
    async_client_with_fakes: httpx.AsyncClient,
    fake_redis: InMemoryRedis,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        middleware.sentry_sdk, "capture_exception", lambda *_, **__: None
    )
    fake_redis.fail_with = RedisConnectionError("down")

    response = await async_client_with_fakes.get("/health/")

    assert response.status_code == 503
    assert response.json() == {"detail": middleware.STORE_ERROR_DETAIL}


@pytest.mark.asyncio
async def test_health_without_store_connection(
    async_client: httpx.AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(handlers.sentry_sdk, "capture_exception", lambda *_: None)

    response = await async_client.get("/health/")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Infrastructure error",
        "message": "Session store is not connected",
    }
