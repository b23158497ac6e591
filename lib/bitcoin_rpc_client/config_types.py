from __future__ import annotations

import math
from dataclasses import dataclass, field

DEFAULT_MAX_RETRIES = 10
DEFAULT_RETRY_INTERVAL_S = 0.5


@dataclass(frozen=True)
class RetryPolicy:
    """Retries applied only while the node answers "still starting" (-28)."""

    max_retries: int = DEFAULT_MAX_RETRIES
    interval_s: float = DEFAULT_RETRY_INTERVAL_S

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if not math.isfinite(self.interval_s) or self.interval_s < 0:
            raise ValueError("interval_s must be a finite number >= 0")


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    username: str
    password: str
    timeout_s: float = 15.0
    retry: RetryPolicy | None = field(default_factory=RetryPolicy)
