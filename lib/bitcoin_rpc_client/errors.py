from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .transport import RpcError


class BitcoinRpcClientError(Exception):
    """Base client error."""


class ConfigError(BitcoinRpcClientError):
    """Client could not be constructed from the given configuration."""


class TransportError(BitcoinRpcClientError):
    """The call did not produce a usable JSON-RPC response."""


class NetworkError(TransportError):
    """Connection level failure (refused, reset, DNS)."""


class RpcTimeoutError(NetworkError):
    """The node did not answer within the configured timeout."""


class HttpStatusError(TransportError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthError(HttpStatusError):
    """Node rejected the credentials."""


class DecodeError(TransportError):
    """Response body is malformed or does not match the expected type."""


class NodeError(BitcoinRpcClientError):
    """Error reported by the node itself, raised by ``RpcResult.unwrap()``."""

    def __init__(self, error: RpcError):
        super().__init__(f"RPC error {error.code}: {error.message}")
        self.error = error

    @property
    def code(self) -> int:
        return self.error.code
