"""CoinGecko public API client for headline prices and 24h charts."""

from typing import Any

from dexdash.upstream.base import UpstreamClient

COINGECKO_BASE = "https://api.coingecko.com/api/v3"

CHART_COINS = frozenset({"bitcoin", "ethereum", "solana"})
MAX_CHART_POINTS = 180


class CoinGeckoClient(UpstreamClient):
    """Fetches simple prices and market charts for the tracked coins."""

    provider = "CoinGecko"
    base_url = COINGECKO_BASE

    async def simple_prices(self) -> dict[str, Any]:
        """USD price and 24h change for bitcoin, ethereum and solana (passthrough)."""
        return await self._request_json(
            "GET",
            f"{self.base_url}/simple/price",
            params={
                "ids": "bitcoin,ethereum,solana",
                "vs_currencies": "usd",
                "include_24hr_change": "true",
            },
        )

    async def market_chart(self, coin: str) -> list[list[float]]:
        """Last 24h of ``[timestamp_ms, price]`` points, at most 180.

        Raises:
            ValueError: If ``coin`` is not one of the tracked coins.
        """
        if coin not in CHART_COINS:
            raise ValueError(f"Unsupported coin: {coin}")
        body = await self._request_json(
            "GET",
            f"{self.base_url}/coins/{coin}/market_chart",
            params={"vs_currency": "usd", "days": 1},
        )
        prices = body.get("prices") if isinstance(body, dict) else None
        if not isinstance(prices, list):
            return []
        return prices[-MAX_CHART_POINTS:]
