"""FastAPI dashboard application factory."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request

from dexdash.dashboard.routes import api
from dexdash.logging import bind_request


def create_dashboard_app(lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI dashboard application.

    Args:
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to expose components and close the shared
                  HTTP client.

    Returns:
        FastAPI application with the JSON API mounted under /api. Route
        handlers expect ``app.state.market_service`` to be set.
    """
    app = FastAPI(
        title="DEX Market Dashboard",
        lifespan=lifespan,
    )

    # Wired by main.py lifespan (or directly by tests)
    app.state.market_service = None

    @app.middleware("http")
    async def request_log_context(request: Request, call_next):
        request_id = bind_request(request.method, request.url.path)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(api.router, prefix="/api")

    return app
