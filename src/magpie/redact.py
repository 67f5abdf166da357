"""Scrubbing of credentials and card data before anything is logged."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

SECRET_KEY_RE = re.compile(r"\b[sp]k_(?:test|live)_[A-Za-z0-9]+\b")

SENSITIVE_HEADERS = ("authorization", "proxy-authorization", "cookie", "set-cookie")
SENSITIVE_FIELDS = ("number", "cvc", "exp_month", "exp_year", "account_number", "otp")


@dataclass(frozen=True)
class RedactConfig:
    headers: tuple[str, ...] = SENSITIVE_HEADERS
    fields: tuple[str, ...] = SENSITIVE_FIELDS
    redaction_token: str = "[REDACTED]"


class Redactor:
    def __init__(self, config: RedactConfig | None = None) -> None:
        self._config = config or RedactConfig()
        self._headers = {name.lower() for name in self._config.headers}
        self._fields = {name.lower() for name in self._config.fields}

    def headers(self, headers: Mapping[str, Any]) -> dict[str, Any]:
        return {
            name: self._config.redaction_token if name.lower() in self._headers else value
            for name, value in headers.items()
        }

    def body(self, payload: Any) -> Any:
        return self._scrub_recursive(payload)

    def _scrub_recursive(self, value: Any) -> Any:
        if isinstance(value, str):
            return SECRET_KEY_RE.sub(self._config.redaction_token, value)
        if isinstance(value, dict):
            return {
                k: self._config.redaction_token if str(k).lower() in self._fields else self._scrub_recursive(v)
                for k, v in value.items()
            }
        if isinstance(value, list):
            return [self._scrub_recursive(item) for item in value]
        if isinstance(value, tuple):
            return tuple(self._scrub_recursive(item) for item in value)
        return value


def build_redactor(*, extra_headers: Iterable[str] = (), extra_fields: Iterable[str] = ()) -> Redactor:
    config = RedactConfig(
        headers=SENSITIVE_HEADERS + tuple(extra_headers),
        fields=SENSITIVE_FIELDS + tuple(extra_fields),
    )
    return Redactor(config)


__all__ = ["RedactConfig", "Redactor", "build_redactor"]
