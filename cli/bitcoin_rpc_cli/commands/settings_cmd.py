from __future__ import annotations

import os

import typer

from .. import console
from ..config import config_path, default_config, load_config, normalize_url, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/bitcoin-rpc/config.toml).")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        url: str = typer.Option(..., "--url", prompt="Node RPC URL", help="RPC URL like http://127.0.0.1:8332"),
        username: str = typer.Option(..., "--username", prompt="RPC username", help="rpcuser of the node."),
        password: str = typer.Option(
            ...,
            "--password",
            prompt="RPC password",
            hide_input=True,
            help="rpcpassword of the node.",
        ),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.url = normalize_url(url, warn=True)
    if not cfg.url:
        console.err("URL cannot be empty.")
        raise typer.Exit(code=2)
    cfg.auth.username = username
    cfg.auth.password = password
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    password_state = "(set)" if cfg.auth.password else "(empty)"
    retry_state = (
        f"{cfg.retry.max_retries}x{cfg.retry.interval_s:g}s" if cfg.retry.enabled else "off"
    )
    console.print(
        f"url={cfg.url} username={cfg.auth.username or '(empty)'} password={password_state} "
        f"timeout_s={cfg.timeout_s:g} retry={retry_state}",
        highlight=False,
        soft_wrap=True,
    )


@app.command("set")
def set_setting(
        url: str | None = typer.Option(None, "--url", help="Set node RPC URL."),
        username: str | None = typer.Option(None, "--username", help="Set RPC username."),
        password: str | None = typer.Option(None, "--password", help="Set RPC password."),
        timeout_s: float | None = typer.Option(None, "--timeout", min=0.1, help="Request timeout in seconds."),
        retry: bool | None = typer.Option(None, "--retry/--no-retry", help="Wait for a node that is still starting."),
        max_retries: int | None = typer.Option(None, "--max-retries", min=0, help="Retries while the node warms up."),
        interval_s: float | None = typer.Option(None, "--interval", min=0.0, help="Seconds between retries."),
):
    cfg = load_config()
    if url is not None:
        cfg.url = normalize_url(url, warn=True)
    if username is not None:
        cfg.auth.username = username
    if password is not None:
        cfg.auth.password = password
    if timeout_s is not None:
        cfg.timeout_s = timeout_s
    if retry is not None:
        cfg.retry.enabled = retry
    if max_retries is not None:
        cfg.retry.max_retries = max_retries
    if interval_s is not None:
        cfg.retry.interval_s = interval_s
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
