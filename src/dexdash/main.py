"""Entry point for the dashboard backend.

Wires all components together and serves the FastAPI app with uvicorn.
The shared httpx.AsyncClient is created with the components and closed in
the FastAPI lifespan on shutdown.

Component wiring order (in build_components):
1. AppSettings (configuration)
2. Logging setup
3. httpx.AsyncClient (shared, explicit timeout)
4. TTLCache
5. Upstream clients (Solana RPC, CoinGecko, Dexscreener, GeckoTerminal, Groq)
6. MarketDataService
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import httpx
import uvicorn
from fastapi import FastAPI

from dexdash.cache import TTLCache
from dexdash.config import AppSettings
from dexdash.logging import get_logger, setup_logging
from dexdash.service import MarketDataService
from dexdash.upstream.coingecko import CoinGeckoClient
from dexdash.upstream.dexscreener import DexscreenerClient
from dexdash.upstream.geckoterminal import GeckoTerminalClient
from dexdash.upstream.oracle import GroqOracle
from dexdash.upstream.solana import SolanaRpcClient


def build_components(
    settings: AppSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Build the HTTP client, cache, upstream clients and service.

    Args:
        settings: Application-wide settings.
        transport: Optional httpx transport override (tests use MockTransport).

    Returns:
        Dict mapping component names to instances.
    """
    http = httpx.AsyncClient(
        timeout=settings.http.timeout_seconds,
        headers={"User-Agent": settings.http.user_agent},
        transport=transport,
    )
    cache = TTLCache(ttl_ms=settings.cache.ttl_ms)

    oracle = GroqOracle(http, settings.agent)
    market_service = MarketDataService(
        cache=cache,
        solana=SolanaRpcClient(http, settings.solana.rpc_url),
        coingecko=CoinGeckoClient(http),
        dexscreener=DexscreenerClient(http),
        geckoterminal=GeckoTerminalClient(http),
        oracle=oracle,
        tx_limit=settings.solana.tx_limit,
    )

    return {
        "http": http,
        "cache": cache,
        "market_service": market_service,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Expose components on app.state and close the HTTP client on shutdown."""
    logger = get_logger("dexdash.main")
    settings: AppSettings = app.state.settings
    components = app.state.components

    app.state.market_service = components["market_service"]

    logger.info(
        "dashboard_started",
        url=f"http://127.0.0.1:{settings.dashboard.port}",
        rpc=settings.solana.rpc_url,
        cache_ttl_ms=settings.cache.ttl_ms,
        agent_mode="groq" if settings.agent.enabled else "fallback",
    )

    yield

    await components["http"].aclose()
    logger.info("dashboard_stopped")


async def run() -> None:
    """Load settings, build components and serve the dashboard."""
    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_format)

    from dexdash.dashboard.app import create_dashboard_app

    app = create_dashboard_app(lifespan=lifespan)
    app.state.settings = settings
    app.state.components = build_components(settings)

    config = uvicorn.Config(
        app,
        host=settings.dashboard.host,
        port=settings.dashboard.port,
        log_level="warning",  # Suppress uvicorn access logs
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
