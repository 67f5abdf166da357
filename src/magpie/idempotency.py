"""Helpers for idempotency keys sent with mutating requests."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

MAX_KEY_LENGTH = 255


def generate_idempotency_key() -> str:
    return uuid4().hex


def is_valid_idempotency_key(key: Any) -> bool:
    return isinstance(key, str) and 1 <= len(key) <= MAX_KEY_LENGTH


__all__ = ["generate_idempotency_key", "is_valid_idempotency_key"]
