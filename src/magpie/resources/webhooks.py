"""Webhook verification exposed on the client as ``magpie.webhooks``."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Type, Union

from .. import webhook
from ..models import WebhookEvent
from ..webhook import Algorithm, ConfigLike, Payload


class WebhooksResource:
    """Verify and parse inbound webhooks.

    Example:
        ```python
        event = magpie.webhooks.construct_event(
            raw_body,
            request.headers["x-magpie-signature"],
            endpoint_secret,
        )
        if event.type == "checkout_session.completed":
            ...
        ```
    """

    def verify_signature(self, payload: Payload, signature: str, secret: str, config: ConfigLike = None) -> bool:
        return webhook.verify_signature(payload, signature, secret, config)

    def verify_signature_with_timestamp(
        self,
        payload: Payload,
        headers: Mapping[str, Union[str, Sequence[str]]],
        secret: str,
        config: ConfigLike = None,
    ) -> bool:
        return webhook.verify_signature_with_timestamp(payload, headers, secret, config)

    def construct_event(
        self,
        payload: Payload,
        signature: str,
        secret: str,
        config: ConfigLike = None,
        *,
        object_type: Optional[Type[Any]] = None,
    ) -> WebhookEvent[Any]:
        return webhook.construct_event(payload, signature, secret, config, object_type=object_type)

    def generate_test_signature(
        self,
        payload: Payload,
        secret: str,
        algorithm: Algorithm = "sha256",
        prefix: str = "v1=",
    ) -> str:
        return webhook.generate_test_signature(payload, secret, algorithm, prefix)

    def is_valid_timestamp(self, timestamp: Any, tolerance: int = webhook.DEFAULT_TOLERANCE) -> bool:
        return webhook.is_valid_timestamp(timestamp, tolerance)


__all__ = ["WebhooksResource"]
