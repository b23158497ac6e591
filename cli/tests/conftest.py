from __future__ import annotations

import pytest


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    recorded: list[float] = []
    monkeypatch.setattr("bitcoin_rpc_client.client.time.sleep", recorded.append)
    return recorded


@pytest.fixture
def cli_home(tmp_path, monkeypatch):
    from bitcoin_rpc_cli import config

    monkeypatch.setattr(config, "user_config_dir", lambda _: str(tmp_path))
    for name in (config.ENV_URL, config.ENV_USER, config.ENV_PASSWORD):
        monkeypatch.delenv(name, raising=False)
    return tmp_path
