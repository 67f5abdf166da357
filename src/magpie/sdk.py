"""The Magpie client with every resource attached."""

from __future__ import annotations

import os
from typing import Optional

import httpx

from .client import BaseClient
from .config import ClientConfig
from .errors import MagpieError
from .resources import (
    ChargesResource,
    CheckoutResource,
    CustomersResource,
    OrganizationsResource,
    PaymentLinksResource,
    PaymentRequestsResource,
    SourcesResource,
    WebhooksResource,
)


class Magpie(BaseClient):
    """Entry point for the Magpie API.

    Example:
        ```python
        async with Magpie("sk_test_123") as magpie:
            customer = await magpie.customers.create({"email": "a@b.com", "description": "VIP"})
            charge = await magpie.charges.create(
                {"amount": 20000, "currency": "php", "source": "src_123", "capture": True},
                {"idempotency_key": generate_idempotency_key()},
            )
        ```
    """

    def __init__(
        self,
        secret_key: str,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(secret_key, config, transport=transport)
        self.customers = CustomersResource(self)
        self.charges = ChargesResource(self)
        self.sources = SourcesResource(self)
        self.checkout = CheckoutResource(self)
        self.payment_links = PaymentLinksResource(self)
        self.payment_requests = PaymentRequestsResource(self)
        self.organizations = OrganizationsResource(self)
        self.webhooks = WebhooksResource()

    @classmethod
    def from_env(cls, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> "Magpie":
        secret_key = os.environ.get("MAGPIE_SECRET_KEY")
        if not secret_key:
            raise MagpieError.configuration("MAGPIE_SECRET_KEY must be set")
        return cls(secret_key, ClientConfig.from_env(), transport=transport)


__all__ = ["Magpie"]
