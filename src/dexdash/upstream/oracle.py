"""Optional AI oracle backed by a Groq (OpenAI-compatible) chat completion.

The oracle is best effort. Missing key, transport errors, bad status codes
and unparsable model output all yield None so callers fall back to the
deterministic heuristic.
"""

import json
from typing import Any

import httpx

from dexdash.config import AgentSettings
from dexdash.exceptions import UpstreamError
from dexdash.logging import get_logger
from dexdash.upstream.base import UpstreamClient

logger = get_logger(__name__)

STRICT_JSON_SUFFIX = "\nReturn STRICT JSON only. No markdown."


def _strict_parse(text: str) -> dict[str, Any] | None:
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def _recover_parse(text: str) -> dict[str, Any] | None:
    """Parse the span from the first '{' to the last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return _strict_parse(text[start : end + 1])


def parse_model_json(text: str) -> dict[str, Any] | None:
    """Two-stage parse of model output: strict JSON, then bounded recovery."""
    return _strict_parse(text) or _recover_parse(text)


class GroqOracle(UpstreamClient):
    """Chat-completion client that asks the model for a JSON object."""

    provider = "Groq"

    def __init__(self, http: httpx.AsyncClient, settings: AgentSettings) -> None:
        super().__init__(http)
        self._settings = settings

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    async def complete_json(self, system: str, user: str) -> dict[str, Any] | None:
        """Return the model's answer as a dict, or None if unavailable."""
        if not self.enabled:
            return None

        payload = {
            "model": self._settings.model,
            "temperature": self._settings.temperature,
            "messages": [
                {"role": "system", "content": system + STRICT_JSON_SUFFIX},
                {"role": "user", "content": user},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self._settings.api_key.get_secret_value()}",
        }
        try:
            body = await self._request_json(
                "POST",
                f"{self._settings.base_url}/chat/completions",
                json=payload,
                headers=headers,
            )
        except (httpx.HTTPError, UpstreamError, ValueError) as e:
            logger.warning("ai_oracle_unavailable", error=str(e))
            return None

        try:
            text = body["choices"][0]["message"]["content"] or "{}"
        except (KeyError, IndexError, TypeError):
            text = None
        if not isinstance(text, str):
            logger.warning("ai_oracle_bad_shape")
            return None

        result = parse_model_json(text)
        if result is None:
            logger.warning("ai_oracle_unparsable", preview=text[:120])
        return result
