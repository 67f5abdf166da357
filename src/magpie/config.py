"""Configuration objects for the Magpie Python SDK."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict

from .errors import MagpieError

VERSION = "1.0.0"

DEFAULT_BASE_URL = "https://api.magpie.im"
DEFAULT_API_VERSION = "v2"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    # Per-attempt deadline and backoff base, both in milliseconds.
    timeout_ms: float = 30000
    max_retries: int = 3
    retry_delay_ms: float = 1000
    debug: bool = False
    user_agent: str = f"magpie-python/{VERSION}"
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.base_url:
            raise MagpieError.configuration("base_url must not be empty")
        if not self.api_version:
            raise MagpieError.configuration("api_version must not be empty")
        if self.timeout_ms <= 0:
            raise MagpieError.configuration(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.max_retries < 0:
            raise MagpieError.configuration(f"max_retries must be >= 0, got {self.max_retries}")
        if self.retry_delay_ms < 0:
            raise MagpieError.configuration(f"retry_delay_ms must be >= 0, got {self.retry_delay_ms}")

    @property
    def root_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.api_version}"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        debug = os.environ.get("MAGPIE_DEBUG", "false").strip().lower() in ("1", "true", "yes", "on")
        try:
            return cls(
                base_url=os.environ.get("MAGPIE_BASE_URL", DEFAULT_BASE_URL),
                api_version=os.environ.get("MAGPIE_API_VERSION", DEFAULT_API_VERSION),
                timeout_ms=float(os.environ.get("MAGPIE_TIMEOUT_MS", "30000")),
                max_retries=int(os.environ.get("MAGPIE_MAX_RETRIES", "3")),
                retry_delay_ms=float(os.environ.get("MAGPIE_RETRY_DELAY_MS", "1000")),
                debug=debug,
            )
        except ValueError as exc:
            raise MagpieError.configuration(f"Invalid Magpie environment configuration: {exc}") from exc


__all__ = ["ClientConfig", "DEFAULT_API_VERSION", "DEFAULT_BASE_URL", "VERSION"]
