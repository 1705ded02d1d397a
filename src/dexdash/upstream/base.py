"""Shared plumbing for upstream HTTP clients.

Every provider client wraps the same ``httpx.AsyncClient`` (created once in
the application lifespan) and goes through ``_request_json`` so status
checking and logging are uniform.
"""

from typing import Any

import httpx

from dexdash.exceptions import UpstreamHTTPError
from dexdash.logging import get_logger

logger = get_logger(__name__)

MAX_ERROR_DETAIL = 200


class UpstreamClient:
    """Base class for provider clients.

    Args:
        http: Shared async HTTP client. The caller owns it and closes it.
    """

    provider: str = "upstream"

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        include_body_in_error: bool = False,
        **kwargs: Any,
    ) -> Any:
        """Issue one request and return the decoded JSON body.

        Raises:
            UpstreamHTTPError: On a non-2xx status.
            httpx.HTTPError: On transport failures (timeouts, DNS, ...).
            ValueError: If the body is not valid JSON.
        """
        response = await self._http.request(method, url, **kwargs)
        if not response.is_success:
            detail = response.text[:MAX_ERROR_DETAIL] if include_body_in_error else ""
            logger.warning(
                "upstream_http_error",
                provider=self.provider,
                status=response.status_code,
                url=str(response.request.url),
            )
            raise UpstreamHTTPError(self.provider, response.status_code, detail)
        return response.json()
