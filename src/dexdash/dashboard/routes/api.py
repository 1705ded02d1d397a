"""JSON API endpoints backing the dashboard UI.

Every reply carries ``ok``. Input validation failures answer 400; upstream
and lookup failures answer 200 with ``{"ok": false, "error": ...}`` so the UI
can render them inline.
"""

from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from dexdash.exceptions import InvalidInputError, NotFoundError
from dexdash.market.swap import simulate_swap
from dexdash.service import MarketDataService
from dexdash.upstream.coingecko import CHART_COINS

log = structlog.get_logger(__name__)

router = APIRouter()

SIMULATE_DEFAULTS = {
    "reserveX": 1000.0,
    "reserveY": 1000.0,
    "amountIn": 10.0,
    "feeBps": 30.0,
}


def _now_iso() -> str:
    """UTC timestamp in ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _ok(**content: Any) -> JSONResponse:
    return JSONResponse(content={"ok": True, **content, "updated": _now_iso()})


def _fail(error: str, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content={"ok": False, "error": error}, status_code=status_code)


def _upstream_fail(event: str, e: Exception, **context: Any) -> JSONResponse:
    """Log an upstream failure and render it as an inline error."""
    log.warning(event, error=str(e), error_type=type(e).__name__, **context)
    return _fail(str(e) or type(e).__name__)


def _service(request: Request) -> MarketDataService:
    return request.app.state.market_service


@router.get("/health")
async def health() -> JSONResponse:
    return JSONResponse(content={"ok": True})


# ---------------------------------------------------------------------------
# Solana
# ---------------------------------------------------------------------------


@router.get("/sol/balance")
async def get_sol_balance(request: Request, pubkey: str = "") -> JSONResponse:
    """SOL balance of a wallet (confirmed commitment)."""
    pubkey = pubkey.strip()
    if not pubkey:
        return _fail("Missing pubkey", status_code=400)
    try:
        sol = await _service(request).sol_balance(pubkey)
    except Exception as e:
        return _upstream_fail("sol_balance_error", e, pubkey=pubkey)
    return _ok(pubkey=pubkey, sol=sol)


@router.get("/sol/tx")
async def get_sol_transactions(request: Request, pubkey: str = "") -> JSONResponse:
    """Most recent transaction signatures of a wallet."""
    pubkey = pubkey.strip()
    if not pubkey:
        return _fail("Missing pubkey", status_code=400)
    try:
        sigs = await _service(request).sol_transactions(pubkey)
    except Exception as e:
        return _upstream_fail("sol_tx_error", e, pubkey=pubkey)
    return _ok(pubkey=pubkey, sigs=sigs)


# ---------------------------------------------------------------------------
# CoinGecko
# ---------------------------------------------------------------------------


@router.get("/prices")
async def get_prices(request: Request) -> JSONResponse:
    """BTC/ETH/SOL USD prices with 24h change (CoinGecko passthrough)."""
    try:
        data = await _service(request).prices()
    except Exception as e:
        return _upstream_fail("prices_error", e)
    return _ok(data=data)


@router.get("/chart")
async def get_chart(request: Request, coin: str = "bitcoin") -> JSONResponse:
    """24h price series for one of bitcoin, ethereum or solana."""
    coin = coin.strip()
    if coin not in CHART_COINS:
        return _fail("coin must be bitcoin|ethereum|solana", status_code=400)
    try:
        prices = await _service(request).chart(coin)
    except Exception as e:
        return _upstream_fail("chart_error", e, coin=coin)
    return _ok(coin=coin, prices=prices)


# ---------------------------------------------------------------------------
# Swap simulator
# ---------------------------------------------------------------------------


def _parse_simulate_body(body: Any) -> dict[str, float]:
    """Read simulator inputs, defaulting absent fields.

    Raises:
        InvalidInputError: If the body is not an object or a field is not numeric.
    """
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise InvalidInputError("Bad input")

    values: dict[str, float] = {}
    for name, default in SIMULATE_DEFAULTS.items():
        raw = body.get(name)
        if raw is None:
            values[name] = default
            continue
        try:
            values[name] = float(raw)
        except (TypeError, ValueError, OverflowError):
            raise InvalidInputError("Bad input") from None
    if not all(math.isfinite(v) for v in values.values()):
        raise InvalidInputError("Bad input")
    return values


@router.post("/simulate")
async def post_simulate(request: Request) -> JSONResponse:
    """Constant-product swap quote for the given reserves, amount and fee."""
    raw = await request.body()
    try:
        body = json.loads(raw) if raw.strip() else None
    except ValueError:
        return _fail("Invalid JSON body", status_code=400)

    try:
        values = _parse_simulate_body(body)
        quote = simulate_swap(
            values["reserveX"],
            values["reserveY"],
            values["amountIn"],
            values["feeBps"],
        )
    except InvalidInputError as e:
        return _fail(str(e), status_code=400)

    return JSONResponse(content={
        "ok": True,
        "input": values,
        "result": quote.to_dict(),
    })


# ---------------------------------------------------------------------------
# Dexscreener / GeckoTerminal / agent
# ---------------------------------------------------------------------------


@router.get("/dex")
async def get_dex(request: Request, q: str = "") -> JSONResponse:
    """Dexscreener snapshot for a symbol or contract address."""
    q = q.strip()
    if not q:
        return _fail("Missing q (symbol or CA)", status_code=400)
    try:
        snapshot = await _service(request).dex(q)
    except Exception as e:
        return _upstream_fail("dex_error", e, q=q)
    if snapshot is None:
        return _fail("No pairs found. Try CA for accuracy.")
    return _ok(q=q, data=snapshot.to_dict())


@router.get("/token_chart")
async def get_token_chart(request: Request, q: str = "") -> JSONResponse:
    """Hourly close series (last 48h) for the pool ``q`` resolves to."""
    q = q.strip()
    if not q:
        return _fail("Missing q", status_code=400)
    try:
        chart = await _service(request).token_chart(q)
    except NotFoundError as e:
        return _fail(str(e))
    except Exception as e:
        return _upstream_fail("token_chart_error", e, q=q)

    return _ok(
        q=q,
        dex=chart.dex.to_dict(),
        gecko={
            "network": chart.network,
            "pool": chart.pool,
            "timeframe": chart.timeframe,
            "aggregate": chart.aggregate,
            "points": len(chart.closes),
        },
        closes=[list(point) for point in chart.closes],
    )


@router.get("/agent/analyze")
async def get_agent_analysis(request: Request, q: str = "") -> JSONResponse:
    """Trading verdict for ``q`` from the AI oracle or the fallback heuristic."""
    q = q.strip()
    if not q:
        return _fail("Missing q", status_code=400)
    try:
        analysis = await _service(request).analyze(q)
    except NotFoundError as e:
        return _fail(str(e))
    except Exception as e:
        return _upstream_fail("agent_analyze_error", e, q=q)

    return _ok(
        q=q,
        dex=analysis.dex.to_dict(),
        agent=analysis.verdict,
        mode=analysis.mode,
    )
