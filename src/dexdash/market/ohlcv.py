"""Normalization of GeckoTerminal OHLCV rows into a close-price series.

GeckoTerminal returns candles as ``[ts, open, high, low, close, volume]``
rows but the schema is not contractually stable, so every row is checked
before use.
"""

import math
from collections.abc import Iterable
from typing import Any

from dexdash.models import CandlePoint

MAX_POINTS = 48

# Unix seconds stay below 1e11 until the year 5138; anything at or above is
# taken to be milliseconds already.
MS_THRESHOLD = 100_000_000_000


def to_milliseconds(ts: float) -> int:
    """Convert a candle timestamp to integer Unix milliseconds."""
    if ts >= MS_THRESHOLD:
        return int(ts)
    return int(ts * 1000)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def normalize_closes(rows: Iterable[Any], limit: int = MAX_POINTS) -> list[CandlePoint]:
    """Turn raw OHLCV rows into ``[(timestamp_ms, close), ...]``.

    Rows that are not sequences of at least five elements, or whose
    timestamp or close is not numeric, are dropped. Input order is kept and
    only the last ``limit`` points are returned.

    Args:
        rows: Raw candle rows, oldest first.
        limit: Maximum number of points to keep.

    Returns:
        List of (timestamp_ms, close) tuples.
    """
    points: list[CandlePoint] = []
    for row in rows:
        if not isinstance(row, (list, tuple)) or len(row) < 5:
            continue
        ts = _as_number(row[0])
        close = _as_number(row[4])
        if ts is None or close is None:
            continue
        points.append((to_milliseconds(ts), close))

    if limit <= 0:
        return []
    return points[-limit:]
