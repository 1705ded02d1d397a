"""Market data service composing the TTL cache with the upstream clients.

Each public coroutine backs one dashboard endpoint. Upstream results are
memoized under ``<endpoint>:<query>`` keys so repeated UI polling within the
TTL window does not hit the providers again. The Dexscreener snapshot is
cached under ``dex:<q>`` and shared by /dex, /token_chart and /agent/analyze.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from dexdash.cache import TTLCache
from dexdash.exceptions import NotFoundError
from dexdash.logging import get_logger
from dexdash.market.networks import map_chain_to_network
from dexdash.market.ohlcv import normalize_closes
from dexdash.market.risk import assess_snapshot, is_valid_ai_verdict
from dexdash.models import CandlePoint, DexSnapshot, OHLCVSeries
from dexdash.upstream.coingecko import CoinGeckoClient
from dexdash.upstream.dexscreener import DexscreenerClient
from dexdash.upstream.geckoterminal import (
    AGGREGATE,
    TIMEFRAME,
    GeckoTerminalClient,
)
from dexdash.upstream.oracle import GroqOracle
from dexdash.upstream.solana import SolanaRpcClient

logger = get_logger(__name__)

AGENT_SYSTEM_PROMPT = """
You are a trading copilot.
Return STRICT JSON only:
{
  "signal":"BUY|SELL|HOLD",
  "why":["...","...","..."],
  "risk":{"status":"SAFE|CAUTION|BLOCK","flags":["...","..."],"checklist":["...","..."]},
  "decision":"OK TO PROCEED|SMALL SIZE / WAIT|DO NOT TRADE"
}
No hype. No guarantees.
""".strip()


@dataclass
class TokenChart:
    """Hourly close series for the pair a query resolved to."""

    dex: DexSnapshot
    network: str
    pool: str
    closes: list[CandlePoint] = field(default_factory=list)
    timeframe: str = TIMEFRAME
    aggregate: int = AGGREGATE


@dataclass
class AgentAnalysis:
    """Agent verdict plus where it came from ("ai" or "fallback")."""

    dex: DexSnapshot
    verdict: dict[str, Any]
    mode: str


class MarketDataService:
    """Cached access to every upstream the dashboard aggregates.

    Args:
        cache: Shared TTL cache.
        solana: Solana RPC client.
        coingecko: CoinGecko client.
        dexscreener: Dexscreener client.
        geckoterminal: GeckoTerminal client.
        oracle: Optional AI oracle. None behaves like an oracle with no key.
        tx_limit: Number of signatures returned by ``sol_transactions``.
    """

    def __init__(
        self,
        cache: TTLCache,
        solana: SolanaRpcClient,
        coingecko: CoinGeckoClient,
        dexscreener: DexscreenerClient,
        geckoterminal: GeckoTerminalClient,
        oracle: GroqOracle | None = None,
        tx_limit: int = 10,
    ) -> None:
        self._cache = cache
        self._solana = solana
        self._coingecko = coingecko
        self._dexscreener = dexscreener
        self._geckoterminal = geckoterminal
        self._oracle = oracle
        self._tx_limit = tx_limit

    @property
    def ai_enabled(self) -> bool:
        return self._oracle is not None and self._oracle.enabled

    # -- Solana -------------------------------------------------------------

    async def sol_balance(self, pubkey: str) -> float:
        return await self._cache.get_or_compute(
            f"bal:{pubkey}", lambda: self._solana.get_balance(pubkey)
        )

    async def sol_transactions(self, pubkey: str) -> list[dict]:
        return await self._cache.get_or_compute(
            f"tx:{pubkey}",
            lambda: self._solana.get_signatures(pubkey, limit=self._tx_limit),
        )

    # -- CoinGecko ----------------------------------------------------------

    async def prices(self) -> dict[str, Any]:
        return await self._cache.get_or_compute("prices", self._coingecko.simple_prices)

    async def chart(self, coin: str) -> list[list[float]]:
        return await self._cache.get_or_compute(
            f"chart:{coin}", lambda: self._coingecko.market_chart(coin)
        )

    # -- Dexscreener / GeckoTerminal ----------------------------------------

    async def dex(self, query: str) -> DexSnapshot | None:
        """Cached Dexscreener snapshot for ``query``; None when no pairs exist."""
        return await self._cache.get_or_compute(
            f"dex:{query}", lambda: self._dexscreener.fetch_dex(query)
        )

    async def _require_dex(self, query: str) -> DexSnapshot:
        snapshot = await self.dex(query)
        if snapshot is None:
            raise NotFoundError("No pairs found. Use contract address (CA).")
        return snapshot

    async def ohlcv(self, network: str, pool: str) -> OHLCVSeries:
        """Cached candle rows and normalized closes for a pool."""

        async def produce() -> OHLCVSeries:
            rows = await self._geckoterminal.fetch_ohlcv(network, pool)
            return OHLCVSeries(ohlcv=rows, closes=normalize_closes(rows))

        return await self._cache.get_or_compute(f"ohlcv:{network}:{pool}", produce)

    async def token_chart(self, query: str) -> TokenChart:
        """Resolve ``query`` to a pool and return its hourly close series.

        Raises:
            NotFoundError: No pair matched, or the pair has no usable
                network or pool address.
        """
        snapshot = await self._require_dex(query)
        network = map_chain_to_network(snapshot.chain)
        pool = snapshot.pair_address
        if not network or not pool:
            raise NotFoundError("Missing network/pool. Try CA or different token.")

        series = await self.ohlcv(network, pool)
        return TokenChart(dex=snapshot, network=network, pool=pool, closes=series.closes)

    # -- Agent --------------------------------------------------------------

    async def analyze(self, query: str) -> AgentAnalysis:
        """Produce a trading verdict for the pair ``query`` resolves to.

        The heuristic verdict is always computed. A structurally valid AI
        verdict replaces it verbatim.

        ``mode`` is "ai" only when the AI verdict was actually used. The Node
        dashboard this replaces reported "ai" whenever a key was configured,
        even after falling back; here a failed or malformed AI answer reports
        "fallback".
        """
        snapshot = await self._require_dex(query)
        fallback = assess_snapshot(snapshot.liquidity_usd, snapshot.volume_24h)

        ai_verdict = None
        if self.ai_enabled:
            user_prompt = (
                f"Token query: {query}\n"
                f"Dexscreener snapshot:\n{json.dumps(snapshot.to_dict(), indent=2)}\n"
                "Use the snapshot only."
            )
            ai_verdict = await self._oracle.complete_json(AGENT_SYSTEM_PROMPT, user_prompt)

        if is_valid_ai_verdict(ai_verdict):
            return AgentAnalysis(dex=snapshot, verdict=ai_verdict, mode="ai")

        if ai_verdict is not None:
            logger.warning("ai_verdict_rejected", query=query)
        return AgentAnalysis(dex=snapshot, verdict=fallback.to_dict(), mode="fallback")
