from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(slots=True)
class FetchConfig:
    """Runtime settings for the fetch pipeline, read from the environment.

    Timeouts are in seconds. The defaults mirror the news API client
    contract: 15 s to connect, 10 s between bytes read.
    """

    connect_timeout: float = field(default_factory=lambda: _env_float("NEWSFETCH_CONNECT_TIMEOUT", 15.0))
    read_timeout: float = field(default_factory=lambda: _env_float("NEWSFETCH_READ_TIMEOUT", 10.0))
    request_url: str = field(default_factory=lambda: os.getenv("NEWSFETCH_REQUEST_URL", "").strip())
    max_workers: int = field(default_factory=lambda: _env_int("NEWSFETCH_MAX_WORKERS", 4))

    @property
    def timeout(self) -> tuple[float, float]:
        """``(connect, read)`` pair in the form ``requests`` expects."""
        return (self.connect_timeout, self.read_timeout)
