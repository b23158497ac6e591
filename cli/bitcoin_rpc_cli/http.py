from __future__ import annotations

from typing import Any, Callable

import typer
from bitcoin_rpc_client import BitcoinCoreClient, ConfigError, RpcResult, TransportError
from bitcoin_rpc_client.config_types import ClientConfig, RetryPolicy

from . import console
from .config import AppConfig, normalize_url

EXIT_NODE_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_TRANSPORT_ERROR = 3


def client_config(cfg: AppConfig, *, url_override: str | None = None, no_retry: bool = False) -> ClientConfig:
    retry = None
    if cfg.retry.enabled and not no_retry:
        retry = RetryPolicy(max_retries=cfg.retry.max_retries, interval_s=cfg.retry.interval_s)
    return ClientConfig(
        base_url=normalize_url(url_override, warn=True) if url_override else cfg.url,
        username=cfg.auth.username,
        password=cfg.auth.password,
        timeout_s=cfg.timeout_s,
        retry=retry,
    )


def make_client(cfg: AppConfig, *, url_override: str | None = None, no_retry: bool = False) -> BitcoinCoreClient:
    try:
        return BitcoinCoreClient(client_config(cfg, url_override=url_override, no_retry=no_retry))
    except (ConfigError, ValueError) as exc:
        console.err(f"Invalid client configuration: {exc}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)


def run_rpc(client: BitcoinCoreClient, fn: Callable[[BitcoinCoreClient], RpcResult[Any]]) -> Any:
    try:
        result = fn(client)
    except TransportError as exc:
        console.err(f"Failed to talk to node: {exc}")
        raise typer.Exit(code=EXIT_TRANSPORT_ERROR)
    finally:
        client.close()

    if not result.ok:
        console.err(f"Node error {result.error.code}: {result.error.message}")
        raise typer.Exit(code=EXIT_NODE_ERROR)
    return result.value
