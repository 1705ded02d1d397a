"""Dexscreener pair lookup.

Dexscreener has no candle data; it is used to resolve a symbol or contract
address into a pair (chain, pool address, liquidity, volume).
"""

from typing import Any
from urllib.parse import quote

from dexdash.logging import get_logger
from dexdash.models import DexSnapshot
from dexdash.upstream.base import UpstreamClient

logger = get_logger(__name__)

DEXSCREENER_BASE = "https://api.dexscreener.com/latest/dex"

# Solana mints are 32-44 chars; symbols are far shorter.
ADDRESS_MIN_LENGTH = 31


def looks_like_address(query: str) -> bool:
    """Heuristic: EVM addresses start with 0x, other addresses are long."""
    return query.startswith("0x") or len(query) >= ADDRESS_MIN_LENGTH


def _number(value: Any) -> float:
    try:
        return float(value) if value else 0
    except (TypeError, ValueError):
        return 0


def snapshot_from_pair(pair: dict[str, Any]) -> DexSnapshot:
    """Reshape a raw Dexscreener pair object into a DexSnapshot."""
    base_token = pair.get("baseToken") or {}
    liquidity = pair.get("liquidity") or {}
    volume = pair.get("volume") or {}
    return DexSnapshot(
        name=base_token.get("name") or "Unknown",
        symbol=base_token.get("symbol") or "Unknown",
        chain=pair.get("chainId") or "unknown",
        dex=pair.get("dexId") or "unknown",
        price_usd=pair.get("priceUsd") or "N/A",
        liquidity_usd=_number(liquidity.get("usd")),
        volume_24h=_number(volume.get("h24")),
        fdv=_number(pair.get("fdv")),
        pair_address=pair.get("pairAddress") or "",
        url=pair.get("url") or "",
    )


class DexscreenerClient(UpstreamClient):
    """Resolves a free-text symbol or contract address to a single pair."""

    provider = "Dexscreener"
    base_url = DEXSCREENER_BASE

    async def fetch_dex(self, query: str) -> DexSnapshot | None:
        """Look up ``query`` and snapshot the first pair returned.

        Addresses go to the token endpoint, anything else to search. The
        first pair is taken as-is, with no ranking, so callers should prefer
        contract addresses for accuracy.

        Returns:
            The snapshot, or None when Dexscreener knows no pairs.
        """
        if looks_like_address(query):
            url = f"{self.base_url}/tokens/{quote(query, safe='')}"
            params = None
        else:
            url = f"{self.base_url}/search"
            params = {"q": query}

        body = await self._request_json("GET", url, params=params)
        pairs = body.get("pairs") if isinstance(body, dict) else None
        if not pairs:
            logger.info("dex_no_pairs", query=query)
            return None

        snapshot = snapshot_from_pair(pairs[0])
        logger.debug(
            "dex_lookup",
            query=query,
            chain=snapshot.chain,
            pair=snapshot.pair_address,
            candidates=len(pairs),
        )
        return snapshot
