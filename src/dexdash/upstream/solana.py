"""Solana JSON-RPC client for wallet balance and recent signatures."""

from typing import Any

import httpx

from dexdash.exceptions import RpcError
from dexdash.upstream.base import UpstreamClient

LAMPORTS_PER_SOL = 1_000_000_000


def lamports_to_sol(lamports: int | float) -> float:
    return float(lamports) / LAMPORTS_PER_SOL


class SolanaRpcClient(UpstreamClient):
    """Minimal JSON-RPC 2.0 client for a Solana RPC endpoint."""

    provider = "RPC"

    def __init__(self, http: httpx.AsyncClient, rpc_url: str) -> None:
        super().__init__(http)
        self._rpc_url = rpc_url

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        """Invoke an RPC method and return its ``result``.

        Raises:
            UpstreamHTTPError: Transport-level failure (non-2xx).
            RpcError: The node answered with a JSON-RPC ``error`` object.
        """
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params or []}
        body = await self._request_json(
            "POST", self._rpc_url, json=payload, include_body_in_error=True
        )
        error = body.get("error") if isinstance(body, dict) else None
        if error:
            if isinstance(error, dict):
                raise RpcError(error.get("message") or "RPC error", error.get("code"))
            raise RpcError(str(error))
        return body.get("result") if isinstance(body, dict) else None

    async def get_balance(self, pubkey: str) -> float:
        """Return the confirmed balance of ``pubkey`` in SOL."""
        result = await self.call("getBalance", [pubkey, {"commitment": "confirmed"}])
        if not isinstance(result, dict) or result.get("value") is None:
            raise RpcError("RPC returned no balance")
        return lamports_to_sol(result["value"])

    async def get_signatures(self, pubkey: str, limit: int = 10) -> list[dict]:
        """Return the most recent transaction signatures for ``pubkey``."""
        result = await self.call("getSignaturesForAddress", [pubkey, {"limit": limit}])
        return result or []
