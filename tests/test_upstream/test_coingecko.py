"""Tests for CoinGeckoClient."""

import pytest

from dexdash.exceptions import UpstreamHTTPError
from dexdash.upstream.coingecko import MAX_CHART_POINTS, CoinGeckoClient


class TestSimplePrices:

    @pytest.mark.asyncio
    async def test_passthrough(self, make_http, json_response) -> None:
        body = {"bitcoin": {"usd": 65000, "usd_24h_change": 1.2}}
        seen = []

        def handler(request):
            seen.append(request)
            return json_response(body)

        async with make_http(handler) as http:
            assert await CoinGeckoClient(http).simple_prices() == body

        params = seen[0].url.params
        assert params["ids"] == "bitcoin,ethereum,solana"
        assert params["vs_currencies"] == "usd"

    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_status(self, make_http, json_response) -> None:
        async with make_http(lambda request: json_response({}, status_code=503)) as http:
            with pytest.raises(UpstreamHTTPError, match="CoinGecko 503"):
                await CoinGeckoClient(http).simple_prices()


class TestMarketChart:

    @pytest.mark.asyncio
    async def test_truncates_to_last_points(self, make_http, json_response) -> None:
        prices = [[i, float(i)] for i in range(300)]
        seen = []

        def handler(request):
            seen.append(request)
            return json_response({"prices": prices})

        async with make_http(handler) as http:
            result = await CoinGeckoClient(http).market_chart("solana")

        assert len(result) == MAX_CHART_POINTS
        assert result[-1] == [299, 299.0]
        assert seen[0].url.path.endswith("/coins/solana/market_chart")
        assert seen[0].url.params["days"] == "1"

    @pytest.mark.asyncio
    async def test_missing_prices_is_empty(self, make_http, json_response) -> None:
        async with make_http(lambda request: json_response({})) as http:
            assert await CoinGeckoClient(http).market_chart("bitcoin") == []

    @pytest.mark.asyncio
    async def test_rejects_unknown_coin(self, make_http, json_response) -> None:
        async with make_http(lambda request: json_response({})) as http:
            with pytest.raises(ValueError):
                await CoinGeckoClient(http).market_chart("dogecoin")
