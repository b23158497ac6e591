from .api import BitcoinRpcApi
from .client import RPC_IN_WARMUP, BitcoinCoreClient
from .config_types import ClientConfig, RetryPolicy
from .errors import (
    AuthError,
    BitcoinRpcClientError,
    ConfigError,
    DecodeError,
    HttpStatusError,
    NetworkError,
    NodeError,
    RpcTimeoutError,
    TransportError,
)
from .transport import RpcError, RpcRequest, RpcResult

__all__ = [
    "BitcoinCoreClient",
    "BitcoinRpcApi",
    "ClientConfig",
    "RetryPolicy",
    "RPC_IN_WARMUP",
    "RpcError",
    "RpcRequest",
    "RpcResult",
    "BitcoinRpcClientError",
    "ConfigError",
    "TransportError",
    "NetworkError",
    "RpcTimeoutError",
    "HttpStatusError",
    "AuthError",
    "DecodeError",
    "NodeError",
]
