"""Tests for the Groq AI oracle and its two-stage JSON parse."""

import json

import httpx
import pytest

from dexdash.config import AgentSettings
from dexdash.upstream.oracle import GroqOracle, parse_model_json

VERDICT = {"signal": "BUY", "risk": {"status": "SAFE"}}


def _completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def agent_settings() -> AgentSettings:
    return AgentSettings(api_key="gsk-test", model="test-model")  # type: ignore[arg-type]


class TestParseModelJson:

    def test_strict(self) -> None:
        assert parse_model_json(json.dumps(VERDICT)) == VERDICT

    def test_recovers_from_surrounding_text(self) -> None:
        text = "Sure! ```json\n" + json.dumps(VERDICT) + "\n``` hope it helps"
        assert parse_model_json(text) == VERDICT

    def test_garbage_is_none(self) -> None:
        assert parse_model_json("no json here") is None
        assert parse_model_json("{not: valid}") is None
        assert parse_model_json("} backwards {") is None

    def test_non_object_is_none(self) -> None:
        assert parse_model_json("[1, 2, 3]") is None


class TestGroqOracle:

    @pytest.mark.asyncio
    async def test_disabled_without_key_makes_no_call(self, make_http) -> None:
        def handler(request):
            raise AssertionError("no request expected")

        async with make_http(handler) as http:
            oracle = GroqOracle(http, AgentSettings(api_key=""))  # type: ignore[arg-type]
            assert oracle.enabled is False
            assert await oracle.complete_json("sys", "user") is None

    @pytest.mark.asyncio
    async def test_sends_strict_json_prompt(self, make_http, json_response, agent_settings) -> None:
        seen = []

        def handler(request):
            seen.append(request)
            return json_response(_completion(json.dumps(VERDICT)))

        async with make_http(handler) as http:
            result = await GroqOracle(http, agent_settings).complete_json("sys", "user")

        assert result == VERDICT
        request = seen[0]
        assert request.url.path.endswith("/chat/completions")
        assert request.headers["authorization"] == "Bearer gsk-test"
        payload = json.loads(request.content)
        assert payload["model"] == "test-model"
        assert payload["temperature"] == 0.2
        assert payload["messages"][0]["content"].endswith("Return STRICT JSON only. No markdown.")
        assert payload["messages"][1] == {"role": "user", "content": "user"}

    @pytest.mark.asyncio
    async def test_unparsable_output_is_none(self, make_http, json_response, agent_settings) -> None:
        async with make_http(lambda request: json_response(_completion("I cannot help"))) as http:
            assert await GroqOracle(http, agent_settings).complete_json("s", "u") is None

    @pytest.mark.asyncio
    async def test_http_error_is_swallowed(self, make_http, json_response, agent_settings) -> None:
        async with make_http(lambda request: json_response({}, status_code=500)) as http:
            assert await GroqOracle(http, agent_settings).complete_json("s", "u") is None

    @pytest.mark.asyncio
    async def test_transport_error_is_swallowed(self, make_http, agent_settings) -> None:
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        async with make_http(handler) as http:
            assert await GroqOracle(http, agent_settings).complete_json("s", "u") is None

    @pytest.mark.asyncio
    async def test_unexpected_body_is_none(self, make_http, json_response, agent_settings) -> None:
        async with make_http(lambda request: json_response({"choices": []})) as http:
            assert await GroqOracle(http, agent_settings).complete_json("s", "u") is None
