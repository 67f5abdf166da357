"""Debug logging for outgoing requests and their responses."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional

from .redact import Redactor, build_redactor

logger = logging.getLogger("magpie.client")

_redactor = build_redactor(extra_headers=("x-api-key",))


def build_request_log(
    *,
    method: str,
    url: str,
    attempt: int,
    headers: Mapping[str, Any],
    params: Optional[Mapping[str, Any]] = None,
    body: Any = None,
    redactor: Redactor = _redactor,
) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "event": "request",
        "method": method,
        "url": url,
        "attempt": attempt,
        "headers": redactor.headers(headers),
    }
    if params:
        entry["params"] = redactor.body(dict(params))
    if body is not None:
        entry["body"] = redactor.body(body)
    return entry


def build_response_log(
    *,
    method: str,
    url: str,
    status: int,
    duration_ms: float,
    headers: Mapping[str, Any],
    data: Any = None,
    redactor: Redactor = _redactor,
) -> Dict[str, Any]:
    return {
        "event": "response",
        "method": method,
        "url": url,
        "status": status,
        "duration_ms": round(duration_ms, 1),
        "headers": {
            "content-type": headers.get("content-type"),
            "request-id": headers.get("request-id") or headers.get("x-request-id"),
        },
        "data": redactor.body(data),
    }


def build_retry_log(
    *,
    method: str,
    url: str,
    retry_count: int,
    max_retries: int,
    delay_ms: float,
    reason: str,
) -> Dict[str, Any]:
    return {
        "event": "retry",
        "method": method,
        "url": url,
        "retry": f"{retry_count}/{max_retries}",
        "delay_ms": round(delay_ms, 1),
        "reason": reason,
    }


def log_debug_event(payload: Dict[str, Any]) -> None:
    logger.info(json.dumps(payload, default=str))


__all__ = ["build_request_log", "build_response_log", "build_retry_log", "log_debug_event"]
