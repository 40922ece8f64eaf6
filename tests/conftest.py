from collections.abc import AsyncGenerator, Callable, Generator

from fastapi import FastAPI
import httpx
import pytest
import pytest_asyncio

from src.core.redis.dependencies import get_redis_client
from src.main.web import get_application
from src.token_auth.engine import TokenEngine
from src.token_auth.settings import LoginType, TokenSettings
from src.token_auth.store import RedisSessionStore
from tests.factories.token_factory import TEST_NOW, TEST_SECRET
from tests.fakes.redis import InMemoryRedis
from tests.helpers.clock import FrozenClock
from tests.helpers.overrides import DependencyOverrides


@pytest.fixture
def app() -> FastAPI:
    return get_application()


@pytest.fixture
def dependency_overrides(app: FastAPI) -> Generator[DependencyOverrides]:
    overrides = DependencyOverrides(app)
    yield overrides
    overrides.reset()


@pytest.fixture
def fake_redis() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
def session_store(fake_redis: InMemoryRedis) -> RedisSessionStore:
    return RedisSessionStore(fake_redis)  # type: ignore[arg-type]


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(TEST_NOW)


@pytest.fixture
def make_engine(
    session_store: RedisSessionStore, clock: FrozenClock
) -> Callable[..., TokenEngine]:
    def _make(**overrides: object) -> TokenEngine:
        values: dict[str, object] = {"secret": TEST_SECRET, **overrides}
        return TokenEngine(TokenSettings(**values), store=session_store, clock=clock)

    return _make


@pytest.fixture
def multi_engine(make_engine: Callable[..., TokenEngine]) -> TokenEngine:
    return make_engine(login_type=LoginType.MULTI)


@pytest.fixture
def single_engine(make_engine: Callable[..., TokenEngine]) -> TokenEngine:
    return make_engine(login_type=LoginType.SINGLE)


@pytest.fixture
def app_with_fakes(
    app: FastAPI,
    dependency_overrides: DependencyOverrides,
    fake_redis: InMemoryRedis,
) -> FastAPI:
    dependency_overrides.provide(get_redis_client, fake_redis)
    return app


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield client


@pytest_asyncio.fixture
async def async_client_with_fakes(
    app_with_fakes: FastAPI,
) -> AsyncGenerator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app_with_fakes)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield client
