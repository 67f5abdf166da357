"""Resource wrappers mapping Magpie REST endpoints to methods."""

from .base import BaseResource
from .charges import ChargesResource
from .checkout import CheckoutResource, CheckoutSessionsResource
from .customers import CustomersResource
from .organizations import OrganizationsResource
from .payment_links import PaymentLinksResource
from .payment_requests import PaymentRequestsResource
from .sources import SourcesResource
from .webhooks import WebhooksResource

__all__ = [
    "BaseResource",
    "ChargesResource",
    "CheckoutResource",
    "CheckoutSessionsResource",
    "CustomersResource",
    "OrganizationsResource",
    "PaymentLinksResource",
    "PaymentRequestsResource",
    "SourcesResource",
    "WebhooksResource",
]
