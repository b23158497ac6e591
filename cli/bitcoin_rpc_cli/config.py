from __future__ import annotations

import math
import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from bitcoin_rpc_client.config_types import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_INTERVAL_S

from . import console

APP_NAME = "bitcoin-rpc"
CONFIG_FILENAME = "config.toml"
URL_DEFAULT = "http://127.0.0.1:8332"
TIMEOUT_S_DEFAULT = 15.0

ENV_URL = "BITCOIN_RPC_URL"
ENV_USER = "BITCOIN_RPC_USER"
ENV_PASSWORD = "BITCOIN_RPC_PASSWORD"

_WARNED_URL_SCHEME = False


@dataclass
class AuthConfig:
    username: str = ""
    password: str = ""


@dataclass
class RetryConfig:
    enabled: bool = True
    max_retries: int = DEFAULT_MAX_RETRIES
    interval_s: float = DEFAULT_RETRY_INTERVAL_S


@dataclass
class AppConfig:
    url: str
    auth: AuthConfig
    retry: RetryConfig = field(default_factory=RetryConfig)
    timeout_s: float = TIMEOUT_S_DEFAULT


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(
        url=URL_DEFAULT,
        auth=AuthConfig(),
        retry=RetryConfig(),
        timeout_s=TIMEOUT_S_DEFAULT,
    )


def normalize_url(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    # bitcoind serves RPC over plain http unless fronted by a proxy
    normalized = f"http://{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_URL_SCHEME
    if _WARNED_URL_SCHEME:
        return
    if not _is_interactive():
        return
    console.warn(f"url missing scheme, assuming {normalized}")
    _WARNED_URL_SCHEME = True


def _is_interactive() -> bool:
    import sys
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "url": cfg.url,
        "timeout_s": float(cfg.timeout_s),
        "auth": {
            "username": cfg.auth.username,
            "password": cfg.auth.password,
        },
        "retry": {
            "enabled": cfg.retry.enabled,
            "max_retries": int(cfg.retry.max_retries),
            "interval_s": float(cfg.retry.interval_s),
        },
    }


def _as_int(value: Any, default: int) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return max(0.0, number)


def from_toml(data: dict[str, Any]) -> AppConfig:
    url = normalize_url(str(data.get("url") or ""), warn=True) or URL_DEFAULT
    timeout_s = _as_float(data.get("timeout_s"), TIMEOUT_S_DEFAULT) or TIMEOUT_S_DEFAULT

    auth_raw = data.get("auth") or {}
    auth = AuthConfig()
    if isinstance(auth_raw, dict):
        auth = AuthConfig(
            username=str(auth_raw.get("username") or ""),
            password=str(auth_raw.get("password") or ""),
        )

    retry_raw = data.get("retry") or {}
    retry = RetryConfig()
    if isinstance(retry_raw, dict):
        enabled = retry_raw.get("enabled", True)
        retry = RetryConfig(
            enabled=enabled if isinstance(enabled, bool) else True,
            max_retries=_as_int(retry_raw.get("max_retries"), DEFAULT_MAX_RETRIES),
            interval_s=_as_float(retry_raw.get("interval_s"), DEFAULT_RETRY_INTERVAL_S),
        )

    return AppConfig(url=url, auth=auth, retry=retry, timeout_s=timeout_s)


def apply_env(cfg: AppConfig) -> AppConfig:
    url = os.getenv(ENV_URL, "").strip()
    username = os.getenv(ENV_USER)
    password = os.getenv(ENV_PASSWORD)
    return AppConfig(
        url=normalize_url(url, warn=True) if url else cfg.url,
        auth=AuthConfig(
            username=cfg.auth.username if username is None else username,
            password=cfg.auth.password if password is None else password,
        ),
        retry=cfg.retry,
        timeout_s=cfg.timeout_s,
    )


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        cfg = from_toml(data)
    except FileNotFoundError:
        cfg = default_config()
    return apply_env(cfg)


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    # holds the RPC password
    os.chmod(path, 0o600)
    return path
