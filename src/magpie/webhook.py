"""Webhook signature verification.

Magpie signs each webhook body with HMAC using the endpoint secret and
sends the hex digest in a header (``v1=<hex>`` by default). A payload
must pass verification before anything in it is parsed or trusted.

Example:
    ```python
    event = construct_event(raw_body, request.headers["x-magpie-signature"], secret)
    if event.type == "charge.succeeded":
        ...
    ```
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass, fields, replace
from typing import Any, Literal, Mapping, Optional, Sequence, Type, Union

from pydantic import ValidationError

from .errors import ErrorType, MagpieError
from .models import WebhookEvent

logger = logging.getLogger("magpie.webhook")

Algorithm = Literal["sha256", "sha1", "sha512"]
Payload = Union[str, bytes, bytearray]

DEFAULT_TOLERANCE = 300

SIGNATURE_MISSING = "webhook_signature_missing"
TIMESTAMP_INVALID = "webhook_timestamp_invalid"
SIGNATURE_INVALID = "webhook_signature_invalid"
PAYLOAD_INVALID = "webhook_payload_invalid"

_DIGESTS = {
    "sha256": hashlib.sha256,
    "sha1": hashlib.sha1,
    "sha512": hashlib.sha512,
}


@dataclass(frozen=True)
class WebhookSignatureConfig:
    algorithm: Algorithm = "sha256"
    signature_header: str = "x-magpie-signature"
    timestamp_header: str = "x-magpie-timestamp"
    tolerance: int = DEFAULT_TOLERANCE
    prefix: str = "v1="


DEFAULT_CONFIG = WebhookSignatureConfig()

ConfigLike = Union[WebhookSignatureConfig, Mapping[str, Any], None]


def resolve_config(config: ConfigLike = None) -> WebhookSignatureConfig:
    """Merge caller overrides onto the defaults; unknown keys are ignored."""
    if config is None:
        return DEFAULT_CONFIG
    if isinstance(config, WebhookSignatureConfig):
        return config
    known = {f.name for f in fields(WebhookSignatureConfig)}
    overrides = {k: v for k, v in config.items() if k in known and v is not None}
    return replace(DEFAULT_CONFIG, **overrides)


def _to_bytes(value: Payload) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return value.encode("utf-8")


def _digest(payload: Payload, secret: str, algorithm: str) -> bytes:
    try:
        digestmod = _DIGESTS[algorithm]
    except KeyError:
        raise ValueError(f"Unsupported webhook signature algorithm: {algorithm}") from None
    return hmac.new(_to_bytes(secret), _to_bytes(payload), digestmod).digest()


def _error(message: str, code: str) -> MagpieError:
    return MagpieError(message, ErrorType.INVALID_REQUEST_ERROR, code=code)


def _get_header(headers: Mapping[str, Union[str, Sequence[str]]], name: str) -> Optional[str]:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() != wanted:
            continue
        if isinstance(value, (list, tuple)):
            return value[0] if value else None
        return value
    return None


def generate_test_signature(
    payload: Payload,
    secret: str,
    algorithm: Algorithm = "sha256",
    prefix: str = "v1=",
) -> str:
    return f"{prefix}{_digest(payload, secret, algorithm).hex()}"


def verify_signature(
    payload: Payload,
    signature: str,
    secret: str,
    config: ConfigLike = None,
) -> bool:
    """Check ``signature`` against the HMAC of ``payload``. Never raises."""
    try:
        cfg = resolve_config(config)
        if not signature.startswith(cfg.prefix):
            logger.debug("Webhook signature rejected: missing prefix %r", cfg.prefix)
            return False
        # Exact match on the lowercase hex form; case or spacing variants fail.
        provided = signature[len(cfg.prefix):].encode("utf-8")
        expected = _digest(payload, secret, cfg.algorithm).hex().encode("ascii")
    except (AttributeError, TypeError, ValueError) as exc:
        logger.debug("Webhook signature rejected: %s", exc)
        return False
    return hmac.compare_digest(provided, expected)


def is_valid_timestamp(timestamp: Any, tolerance: int = DEFAULT_TOLERANCE) -> bool:
    """True when ``timestamp`` (unix seconds) is within ``tolerance`` of now."""
    try:
        return abs(int(time.time()) - timestamp) <= tolerance
    except TypeError:
        return False


def verify_signature_with_timestamp(
    payload: Payload,
    headers: Mapping[str, Union[str, Sequence[str]]],
    secret: str,
    config: ConfigLike = None,
) -> bool:
    cfg = resolve_config(config)
    signature = _get_header(headers, cfg.signature_header)
    if not signature:
        raise _error(f"Missing signature header: {cfg.signature_header}", SIGNATURE_MISSING)

    raw_timestamp = _get_header(headers, cfg.timestamp_header)
    if raw_timestamp:
        try:
            timestamp = int(raw_timestamp)
        except ValueError:
            timestamp = None
        if timestamp is None or not is_valid_timestamp(timestamp, cfg.tolerance):
            raise _error("Webhook timestamp is outside tolerance window", TIMESTAMP_INVALID)

    return verify_signature(payload, signature, secret, cfg)


def construct_event(
    payload: Payload,
    signature: str,
    secret: str,
    config: ConfigLike = None,
    *,
    object_type: Optional[Type[Any]] = None,
) -> WebhookEvent[Any]:
    """Verify ``payload`` and parse it into a :class:`WebhookEvent`.

    The signature is checked first; an unverified body is never decoded.
    ``object_type`` (e.g. ``Charge``) types ``event.data.object``.
    """
    if not verify_signature(payload, signature, secret, config):
        raise _error("Invalid webhook signature", SIGNATURE_INVALID)

    try:
        text = payload.decode("utf-8") if isinstance(payload, (bytes, bytearray)) else payload
        parsed = json.loads(text)
    except ValueError as exc:
        raise _error("Invalid JSON in webhook payload", PAYLOAD_INVALID) from exc

    model = WebhookEvent[object_type] if object_type is not None else WebhookEvent
    try:
        return model.model_validate(parsed)
    except ValidationError as exc:
        raise _error(f"Webhook payload is not a valid event: {exc.error_count()} error(s)", PAYLOAD_INVALID) from exc


__all__ = [
    "DEFAULT_TOLERANCE",
    "PAYLOAD_INVALID",
    "SIGNATURE_INVALID",
    "SIGNATURE_MISSING",
    "TIMESTAMP_INVALID",
    "WebhookSignatureConfig",
    "construct_event",
    "generate_test_signature",
    "is_valid_timestamp",
    "resolve_config",
    "verify_signature",
    "verify_signature_with_timestamp",
]
