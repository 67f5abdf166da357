"""Magpie payments Python SDK."""

from .client import ApiResponse, BaseClient, RequestOptions
from .config import ClientConfig
from .errors import ErrorType, MagpieError
from .idempotency import generate_idempotency_key, is_valid_idempotency_key
from .models import LastResponse, WebhookEvent
from .sdk import Magpie
from .webhook import (
    WebhookSignatureConfig,
    construct_event,
    generate_test_signature,
    is_valid_timestamp,
    verify_signature,
    verify_signature_with_timestamp,
)

__all__ = [
    "ApiResponse",
    "BaseClient",
    "ClientConfig",
    "ErrorType",
    "LastResponse",
    "Magpie",
    "MagpieError",
    "RequestOptions",
    "WebhookEvent",
    "WebhookSignatureConfig",
    "construct_event",
    "generate_idempotency_key",
    "generate_test_signature",
    "is_valid_idempotency_key",
    "is_valid_timestamp",
    "verify_signature",
    "verify_signature_with_timestamp",
]
