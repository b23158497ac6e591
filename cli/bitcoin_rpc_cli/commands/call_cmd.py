from __future__ import annotations

import json
from typing import Any

import typer

from ..config import load_config
from ..http import make_client, run_rpc
from ..output import emit


def parse_param(raw: str) -> Any:
    """Interpret a shell argument as JSON, falling back to a plain string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def call(
        method: str = typer.Argument(..., help="RPC method name, e.g. getblockchaininfo."),
        params: list[str] | None = typer.Argument(None, help="Positional parameters (JSON or plain strings)."),
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
        json_out: bool = typer.Option(False, "--json", help="Always print JSON."),
) -> None:
    """Call any RPC method and print its result."""
    cfg = load_config()
    client = make_client(cfg, url_override=url, no_retry=no_retry)
    values = [parse_param(p) for p in params or []]
    result = run_rpc(client, lambda c: c.call(method, *values))
    emit(result, json_out=json_out)
