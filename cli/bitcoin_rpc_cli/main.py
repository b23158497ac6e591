from __future__ import annotations

import typer

from .commands import call_cmd, chain_cmd, settings_cmd, tx_cmd, wallet_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="bitcoin-rpc",
        help="Bitcoin Core JSON-RPC client",
        no_args_is_help=True,
    )

    app.command("call")(call_cmd.call)
    app.add_typer(chain_cmd.app, name="chain")
    app.add_typer(tx_cmd.app, name="tx")
    app.add_typer(wallet_cmd.app, name="wallet")
    app.add_typer(settings_cmd.app, name="settings")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
