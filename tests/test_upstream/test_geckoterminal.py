"""Tests for GeckoTerminalClient and candle extraction."""

import pytest

from dexdash.exceptions import UpstreamHTTPError
from dexdash.upstream.geckoterminal import GeckoTerminalClient, extract_candles

ROWS = [[1700000000, 1, 2, 0.5, 1.5, 100]]


class TestExtractCandles:

    @pytest.mark.parametrize("field", ["ohlcv_list", "ohlcv", "candles"])
    def test_each_known_shape(self, field: str) -> None:
        body = {"data": {"attributes": {field: ROWS}}}
        assert extract_candles(body) == ROWS

    def test_first_present_shape_wins(self) -> None:
        other = [[1700003600, 1, 1, 1, 9.0, 1]]
        body = {"data": {"attributes": {"ohlcv": other, "ohlcv_list": ROWS}}}
        assert extract_candles(body) == ROWS

    def test_empty_list_falls_through_to_next_shape(self) -> None:
        body = {"data": {"attributes": {"ohlcv_list": [], "candles": ROWS}}}
        assert extract_candles(body) == ROWS

    @pytest.mark.parametrize(
        "body",
        [{}, {"data": None}, {"data": {"attributes": {}}}, [], {"data": {"attributes": {"ohlcv_list": "x"}}}],
    )
    def test_missing_shapes_yield_empty(self, body) -> None:
        assert extract_candles(body) == []


class TestFetchOhlcv:

    @pytest.mark.asyncio
    async def test_builds_hourly_request(self, make_http, json_response) -> None:
        seen = []

        def handler(request):
            seen.append(request)
            return json_response({"data": {"attributes": {"ohlcv_list": ROWS}}})

        async with make_http(handler) as http:
            rows = await GeckoTerminalClient(http).fetch_ohlcv("polygon_pos", "0xpool")

        assert rows == ROWS
        request = seen[0]
        assert request.url.path == "/api/v2/networks/polygon_pos/pools/0xpool/ohlcv/hour"
        assert request.url.params["aggregate"] == "1"
        assert request.url.params["limit"] == "48"
        assert request.headers["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_http_error(self, make_http, json_response) -> None:
        async with make_http(lambda request: json_response({}, status_code=404)) as http:
            with pytest.raises(UpstreamHTTPError, match="GeckoTerminal 404"):
                await GeckoTerminalClient(http).fetch_ohlcv("solana", "pool")
