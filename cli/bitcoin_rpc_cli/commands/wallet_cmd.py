from __future__ import annotations

import typer

from ..config import load_config
from ..http import make_client, run_rpc
from ..output import emit

app = typer.Typer(help="Wallet commands (the node must have a wallet loaded).")


@app.command("balance")
def balance(
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL (e.g. .../wallet/<name>)."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    emit(run_rpc(client, lambda c: c.get_balance()))


@app.command("new-address")
def new_address(
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL (e.g. .../wallet/<name>)."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    emit(run_rpc(client, lambda c: c.get_new_address()))


@app.command("unspent")
def unspent(
        min_conf: int = typer.Option(1, "--min-conf", min=0, help="Minimum confirmations (0 includes mempool)."),
        max_conf: int | None = typer.Option(None, "--max-conf", min=0, help="Maximum confirmations."),
        address: list[str] | None = typer.Option(None, "--address", help="Only outputs paying this address."),
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL (e.g. .../wallet/<name>)."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    emit(run_rpc(client, lambda c: c.list_unspent(min_conf, max_conf, address or None)))


@app.command("send")
def send(
        address: str = typer.Argument(..., help="Destination address."),
        amount: float = typer.Argument(..., help="Amount in BTC."),
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL (e.g. .../wallet/<name>)."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    emit(run_rpc(client, lambda c: c.send_to_address(address, amount)))
