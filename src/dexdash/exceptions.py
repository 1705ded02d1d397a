"""Custom exceptions for the dashboard backend.

Route handlers translate these into ``{"ok": false, "error": ...}`` replies:
InvalidInputError becomes HTTP 400, everything else HTTP 200.
"""


class DashboardError(Exception):
    """Base exception for all dashboard errors."""


class InvalidInputError(DashboardError):
    """Raised when query or body parameters fail validation."""


class UpstreamError(DashboardError):
    """Base for failures reported by a third-party provider."""


class UpstreamHTTPError(UpstreamError):
    """Raised when a provider answers with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, detail: str = "") -> None:
        self.provider = provider
        self.status_code = status_code
        self.detail = detail
        message = f"{provider} {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class RpcError(UpstreamError):
    """Raised when a JSON-RPC reply carries an error payload."""

    def __init__(self, message: str = "RPC error", code: int | None = None) -> None:
        self.code = code
        super().__init__(message)


class NotFoundError(DashboardError):
    """Raised when a lookup resolves to nothing (no pair, no pool)."""
