from __future__ import annotations

import base64
import functools
import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from .config_types import ClientConfig
from .errors import (
    AuthError,
    ConfigError,
    DecodeError,
    HttpStatusError,
    NetworkError,
    NodeError,
    RpcTimeoutError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSONRPC_VERSION = "1.0"
# Calls are synchronous and never pipelined, so the id is never correlated.
REQUEST_ID = "42"
USER_AGENT = "bitcoin-rpc-client/0.1.0"


@dataclass(frozen=True)
class RpcRequest:
    method: str
    params: tuple[Any, ...] = ()
    version: str = JSONRPC_VERSION
    id: str = REQUEST_ID

    def __post_init__(self) -> None:
        if not self.method:
            raise ValueError("RPC method name must not be empty")

    def to_payload(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.version,
            "id": self.id,
            "method": self.method,
            "params": [to_jsonable_python(p, by_alias=True, exclude_none=True) for p in self.params],
        }


@dataclass(frozen=True)
class RpcError:
    code: int
    message: str


@dataclass(frozen=True)
class RpcResult(Generic[T]):
    """What the node answered: a value, or the error it reported."""

    value: T | None = None
    error: RpcError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise NodeError(self.error)
        return self.value  # type: ignore[return-value]


def basic_auth_header(username: str, password: str) -> str:
    if not isinstance(username, str) or not isinstance(password, str):
        raise ConfigError("RPC username and password must be strings")
    if ":" in username:
        raise ConfigError("RPC username must not contain ':'")
    for label, value in (("username", username), ("password", password)):
        if any(ord(ch) < 32 or ord(ch) == 127 for ch in value):
            raise ConfigError(f"RPC {label} contains control characters")
    try:
        raw = f"{username}:{password}".encode("utf-8")
    except UnicodeEncodeError as e:
        raise ConfigError("RPC credentials cannot be encoded as UTF-8") from e
    return "Basic " + base64.b64encode(raw).decode("ascii")


def _parse_url(raw: str) -> httpx.URL:
    value = (raw or "").strip()
    if not value:
        raise ConfigError("RPC url must not be empty")
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigError(f"invalid RPC url {value!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"RPC url must be an absolute http(s) URL, got {value!r}")
    return url


@functools.lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


class Transport:
    """Posts JSON-RPC envelopes to one node with a fixed Basic-Auth header."""

    def __init__(self, cfg: ClientConfig, *, http_transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._url = _parse_url(cfg.base_url)
        headers = {
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
            "Authorization": basic_auth_header(cfg.username, cfg.password),
        }
        try:
            self._client = httpx.Client(
                timeout=cfg.timeout_s,
                headers=headers,
                transport=http_transport,
            )
        except (ValueError, TypeError) as e:
            raise ConfigError(f"unable to create HTTP client: {e}") from e

    @property
    def url(self) -> str:
        return str(self._url)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def send(self, request: RpcRequest, response_type: Any = Any) -> RpcResult[Any]:
        logger.debug("POST %s method=%s", self._url, request.method)
        try:
            r = self._client.post(self._url, json=request.to_payload())
        except httpx.TimeoutException as e:
            raise RpcTimeoutError(f"{request.method} timed out: {e}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"{request.method} failed: {e}") from e

        if r.status_code in (401, 403):
            raise AuthError(
                r.status_code,
                f"{request.method} rejected with {r.status_code}, check RPC credentials",
                r.text[:1000] or None,
            )

        data: Any = None
        try:
            data = r.json()
        except ValueError:
            data = None

        if not (isinstance(data, dict) and ("result" in data or "error" in data)):
            details = r.text[:1000] or None
            if not r.is_success:
                raise HttpStatusError(r.status_code, f"{request.method} failed with {r.status_code}", details)
            raise DecodeError(f"{request.method} returned a malformed JSON-RPC response: {details!r}")

        return _decode_envelope(request.method, data, response_type)


def _decode_envelope(method: str, data: dict[str, Any], response_type: Any) -> RpcResult[Any]:
    error = data.get("error")
    if error is not None:
        code = error.get("code") if isinstance(error, dict) else None
        message = error.get("message") if isinstance(error, dict) else None
        if not isinstance(code, int) or isinstance(code, bool) or not isinstance(message, str):
            raise DecodeError(f"{method} returned a malformed error object: {error!r}")
        return RpcResult(error=RpcError(code=code, message=message))

    try:
        value = _adapter(response_type).validate_python(data.get("result"))
    except ValidationError as e:
        raise DecodeError(f"{method} result does not match {_type_name(response_type)}: {e}") from e
    return RpcResult(value=value)
