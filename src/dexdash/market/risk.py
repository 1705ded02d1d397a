"""Deterministic risk heuristic used when the AI oracle is unavailable.

The heuristic looks only at pool liquidity and 24h volume from the
Dexscreener snapshot. It never suggests BUY or SELL; only a valid AI verdict
can.
"""

from typing import Any

from dexdash.models import AgentVerdict, RiskAssessment, RiskStatus, Signal

BLOCK_LIQUIDITY_USD = 5000
CAUTION_LIQUIDITY_USD = 20000
MIN_VOLUME_24H_USD = 5000
HEALTHY_USD = 50000  # liquidity and volume both at least this look healthy

MAX_WHY = 3
MAX_FLAGS = 4
MAX_CHECKLIST = 4

CHECKLIST = [
    "verify_contract_CA",
    "check_liquidity_depth",
    "check_top_holders",
    "start_small_test_trade",
]

CAUTION_REASONS = [
    "Avoid chasing pumps, wait for confirmation.",
    "Start with tiny size if you proceed.",
]


def assess_snapshot(liquidity_usd: float, volume_24h: float) -> AgentVerdict:
    """Classify a pair snapshot by liquidity and volume thresholds.

    Args:
        liquidity_usd: Pool liquidity in USD.
        volume_24h: Traded volume over the last 24h in USD.

    Returns:
        A fully populated AgentVerdict with signal HOLD.

    A snapshot that trips no threshold is reported SAFE. The Node dashboard
    this replaces started every snapshot at CAUTION and never reported SAFE;
    the change is deliberate.
    """
    status = RiskStatus.SAFE
    flags: list[str] = []

    if liquidity_usd < BLOCK_LIQUIDITY_USD:
        status = RiskStatus.BLOCK
        flags.append("Very low liquidity: high slippage / rug risk.")
    elif liquidity_usd < CAUTION_LIQUIDITY_USD:
        status = RiskStatus.CAUTION
        flags.append("Low liquidity: expect slippage.")

    if volume_24h < MIN_VOLUME_24H_USD:
        if status is not RiskStatus.BLOCK:
            status = RiskStatus.CAUTION
        flags.append("Very low 24h volume: easy to manipulate.")

    if liquidity_usd >= HEALTHY_USD and volume_24h >= HEALTHY_USD:
        lead = "Liquidity + volume look healthy (still not a guarantee)."
    else:
        lead = "Risk/confirmation is weak from snapshot."
    why = [lead, *CAUTION_REASONS]

    decision = "DO NOT TRADE" if status is RiskStatus.BLOCK else "SMALL SIZE / WAIT"

    return AgentVerdict(
        signal=Signal.HOLD,
        why=why[:MAX_WHY],
        risk=RiskAssessment(
            status=status,
            flags=flags[:MAX_FLAGS],
            checklist=CHECKLIST[:MAX_CHECKLIST],
        ),
        decision=decision,
    )


def is_valid_ai_verdict(verdict: Any) -> bool:
    """Shape check for AI output: a ``signal`` and a ``risk.status`` must be present.

    Content is not validated further; a verdict that passes replaces the
    heuristic result as-is.
    """
    if not isinstance(verdict, dict) or not verdict.get("signal"):
        return False
    risk = verdict.get("risk")
    return isinstance(risk, dict) and bool(risk.get("status"))
