"""Pure market-data helpers: chain mapping, candle normalization, risk, swaps."""

from dexdash.market.networks import map_chain_to_network
from dexdash.market.ohlcv import normalize_closes
from dexdash.market.risk import assess_snapshot, is_valid_ai_verdict
from dexdash.market.swap import simulate_swap

__all__ = [
    "assess_snapshot",
    "is_valid_ai_verdict",
    "map_chain_to_network",
    "normalize_closes",
    "simulate_swap",
]
