"""Shared data models for the dashboard backend.

Every model is transient: rebuilt per request or per cache window and
serialized to JSON through ``to_dict``. Keys use the camelCase names the
web UI reads.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Signal(str, Enum):
    """Trade direction suggested by the agent."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class RiskStatus(str, Enum):
    """Risk classification of a pair snapshot."""

    SAFE = "SAFE"
    CAUTION = "CAUTION"
    BLOCK = "BLOCK"


@dataclass
class DexSnapshot:
    """Market snapshot of one DEX pair.

    Built from the first pair of a Dexscreener lookup. Fields the provider
    omits fall back to sentinels so the UI never receives null.
    """

    name: str = "Unknown"
    symbol: str = "Unknown"
    chain: str = "unknown"
    dex: str = "unknown"
    price_usd: str = "N/A"  # Dexscreener reports prices as strings
    liquidity_usd: float = 0
    volume_24h: float = 0
    fdv: float = 0
    pair_address: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "chain": self.chain,
            "dex": self.dex,
            "priceUsd": self.price_usd,
            "liquidityUsd": self.liquidity_usd,
            "volume24h": self.volume_24h,
            "fdv": self.fdv,
            "pairAddress": self.pair_address,
            "url": self.url,
        }


# [timestamp_ms, close]
CandlePoint = tuple[int, float]


@dataclass
class OHLCVSeries:
    """Normalized close series plus the raw candle rows it was built from."""

    ohlcv: list[Any] = field(default_factory=list)
    closes: list[CandlePoint] = field(default_factory=list)


@dataclass
class RiskAssessment:
    """Risk section of an agent verdict."""

    status: RiskStatus
    flags: list[str] = field(default_factory=list)
    checklist: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "flags": list(self.flags),
            "checklist": list(self.checklist),
        }


@dataclass
class AgentVerdict:
    """Trading verdict returned by /api/agent/analyze."""

    signal: Signal
    why: list[str]
    risk: RiskAssessment
    decision: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "signal": self.signal.value,
            "why": list(self.why),
            "risk": self.risk.to_dict(),
            "decision": self.decision,
        }


@dataclass
class SwapQuote:
    """Result of a constant-product swap simulation."""

    amount_out: float
    new_reserve_x: float
    new_reserve_y: float
    price_impact_pct: float

    def to_dict(self) -> dict[str, float]:
        return {
            "amountOut": self.amount_out,
            "newReserveX": self.new_reserve_x,
            "newReserveY": self.new_reserve_y,
            "priceImpactPct": self.price_impact_pct,
        }
