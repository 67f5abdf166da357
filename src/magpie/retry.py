"""Retry policy for the request engine.

A failed attempt is replayed only for transient failures (connection
errors, 5xx, 429) and only when replaying is safe: POST calls need an
idempotency key so the server can drop duplicates.
"""

from __future__ import annotations

import random
from typing import Callable, Optional

from .errors import CONNECTION_REFUSED, CONNECTION_RESET, DNS_ERROR, TIMEOUT

RETRYABLE_ERROR_CODES = frozenset({DNS_ERROR, CONNECTION_RESET, TIMEOUT, CONNECTION_REFUSED})

MAX_RETRY_DELAY_MS = 30000
JITTER_RATIO = 0.1


def should_retry(
    *,
    method: str,
    attempt_count: int,
    max_retries: int,
    retryable: bool = True,
    has_idempotency_key: bool = False,
    status_code: Optional[int] = None,
    error_code: Optional[str] = None,
) -> bool:
    """Decide whether the attempt that just failed gets another try.

    Exactly one of ``status_code`` (an HTTP error response) or
    ``error_code`` (a transport failure) describes the failure.
    """
    if attempt_count >= max_retries:
        return False
    if not retryable:
        return False
    if method.upper() == "POST" and not has_idempotency_key:
        return False
    if status_code is None:
        return error_code in RETRYABLE_ERROR_CODES
    return status_code >= 500 or status_code == 429


def calculate_retry_delay(
    retry_count: int,
    retry_delay_ms: float,
    *,
    rand: Callable[[], float] = random.random,
) -> float:
    """Backoff in milliseconds before retry number ``retry_count`` (1-based)."""
    exponential = retry_delay_ms * (2 ** (retry_count - 1))
    jitter = rand() * JITTER_RATIO * exponential
    return min(exponential + jitter, MAX_RETRY_DELAY_MS)


__all__ = [
    "JITTER_RATIO",
    "MAX_RETRY_DELAY_MS",
    "RETRYABLE_ERROR_CODES",
    "calculate_retry_delay",
    "should_retry",
]
