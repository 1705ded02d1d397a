"""GeckoTerminal OHLCV client (free public API, no key)."""

from collections.abc import Callable
from typing import Any
from urllib.parse import quote

from dexdash.logging import get_logger
from dexdash.upstream.base import UpstreamClient

logger = get_logger(__name__)

GECKO_BASE = "https://api.geckoterminal.com/api/v2"

TIMEFRAME = "hour"
AGGREGATE = 1
CANDLE_LIMIT = 48


def _attributes(body: Any) -> dict[str, Any]:
    data = body.get("data") if isinstance(body, dict) else None
    attributes = data.get("attributes") if isinstance(data, dict) else None
    return attributes if isinstance(attributes, dict) else {}


def _field_extractor(name: str) -> Callable[[dict[str, Any]], list | None]:
    def extract(attributes: dict[str, Any]) -> list | None:
        value = attributes.get(name)
        return value if isinstance(value, list) and value else None

    return extract


# Known shapes of the candle list, tried in order.
CANDLE_EXTRACTORS: list[Callable[[dict[str, Any]], list | None]] = [
    _field_extractor("ohlcv_list"),
    _field_extractor("ohlcv"),
    _field_extractor("candles"),
]


def extract_candles(body: Any) -> list:
    """Return the raw candle rows from an OHLCV response, or [] if absent."""
    attributes = _attributes(body)
    for extractor in CANDLE_EXTRACTORS:
        rows = extractor(attributes)
        if rows is not None:
            return rows
    return []


class GeckoTerminalClient(UpstreamClient):
    """Fetches hourly candles for a pool on a GeckoTerminal network."""

    provider = "GeckoTerminal"
    base_url = GECKO_BASE

    async def fetch_ohlcv(self, network: str, pool: str) -> list:
        """Raw ``[ts, open, high, low, close, volume]`` rows for the last 48 hours."""
        url = (
            f"{self.base_url}/networks/{quote(network, safe='')}"
            f"/pools/{quote(pool, safe='')}/ohlcv/{TIMEFRAME}"
        )
        body = await self._request_json(
            "GET",
            url,
            params={"aggregate": AGGREGATE, "limit": CANDLE_LIMIT},
            headers={"accept": "application/json"},
        )
        rows = extract_candles(body)
        logger.debug("ohlcv_fetched", network=network, pool=pool, rows=len(rows))
        return rows
