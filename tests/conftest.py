"""Shared test fixtures for the dashboard backend."""

import json
from collections.abc import Callable

import httpx
import pytest

from dexdash.config import AgentSettings, AppSettings, CacheSettings, SolanaSettings


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults (AI oracle disabled)."""
    return AppSettings(
        log_level="DEBUG",
        solana=SolanaSettings(rpc_url="https://rpc.test", tx_limit=5),
        cache=CacheSettings(ttl_ms=15000),
        agent=AgentSettings(api_key=""),  # type: ignore[arg-type]
    )


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    """Build an httpx.Response carrying a JSON body."""

    def _build(body: object, status_code: int = 200) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(body).encode())

    return _build


@pytest.fixture
def make_http() -> Callable[..., httpx.AsyncClient]:
    """Factory for an AsyncClient whose requests are answered by ``handler``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
