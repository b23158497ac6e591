from __future__ import annotations

import typer
from rich.table import Table

from .. import console
from ..config import load_config
from ..http import make_client, run_rpc
from ..output import emit

app = typer.Typer(help="Blockchain queries.")


@app.command("info")
def chain_info(
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    info = run_rpc(client, lambda c: c.get_blockchain_info())
    if json_out:
        emit(info, json_out=True)
        return

    table = Table(show_header=False, box=None)
    table.add_column("key", style="bold")
    table.add_column("value")
    table.add_row("chain", info.chain)
    table.add_row("blocks", str(info.blocks))
    table.add_row("headers", str(info.headers))
    table.add_row("best block", info.bestblockhash)
    table.add_row("difficulty", f"{info.difficulty:g}")
    table.add_row("progress", f"{info.verificationprogress * 100:.2f}%")
    table.add_row("pruned", "yes" if info.pruned else "no")
    console.print(table)


@app.command("best-block")
def best_block(
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    emit(run_rpc(client, lambda c: c.get_best_block_hash()))


@app.command("count")
def block_count(
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    emit(run_rpc(client, lambda c: c.get_block_count()))


@app.command("block-hash")
def block_hash(
        height: int = typer.Argument(..., min=0, help="Block height."),
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    emit(run_rpc(client, lambda c: c.get_block_hash(height)))


@app.command("block")
def block(
        block_hash: str = typer.Argument(..., help="Block hash."),
        verbose: bool = typer.Option(False, "--verbose", help="Include decoded transactions."),
        url: str | None = typer.Option(None, "--url", help="Override node RPC URL."),
        no_retry: bool = typer.Option(False, "--no-retry", help="Do not wait for a starting node."),
):
    client = make_client(load_config(), url_override=url, no_retry=no_retry)
    if verbose:
        emit(run_rpc(client, lambda c: c.get_block_verbose(block_hash)))
    else:
        emit(run_rpc(client, lambda c: c.get_block(block_hash)))
