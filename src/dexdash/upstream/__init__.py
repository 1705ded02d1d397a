"""Upstream provider clients built on a shared httpx.AsyncClient."""

from dexdash.upstream.base import UpstreamClient
from dexdash.upstream.coingecko import CoinGeckoClient
from dexdash.upstream.dexscreener import DexscreenerClient
from dexdash.upstream.geckoterminal import GeckoTerminalClient
from dexdash.upstream.oracle import GroqOracle
from dexdash.upstream.solana import SolanaRpcClient

__all__ = [
    "CoinGeckoClient",
    "DexscreenerClient",
    "GeckoTerminalClient",
    "GroqOracle",
    "SolanaRpcClient",
    "UpstreamClient",
]
