from __future__ import annotations

import typer

from ..config import load_config
from ..http import make_client, run_rpc
from ..output import emit

app = typer.Typer(help="Raw transaction commands.")


@app.command("get")
def get_tx(
        txid: str = typer.Argument(..., help="Transaction id."),
        verbose: bool = typer.Option(False, "--verbose", help="Decode the transaction."),
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    if verbose:
        emit(run_rpc(client, lambda c: c.get_raw_transaction_verbose(txid)))
    else:
        emit(run_rpc(client, lambda c: c.get_raw_transaction_serialized(txid)))


@app.command("decode")
def decode_tx(
        tx_hex: str = typer.Argument(..., help="Serialized transaction (hex)."),
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    emit(run_rpc(client, lambda c: c.decode_raw_transaction(tx_hex)))


@app.command("send")
def send_tx(
        tx_hex: str = typer.Argument(..., help="Signed serialized transaction (hex)."),
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    emit(run_rpc(client, lambda c: c.send_raw_transaction(tx_hex)))
