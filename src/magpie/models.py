"""Pydantic models mirroring Magpie API payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

T = TypeVar("T")


@dataclass(frozen=True)
class LastResponse:
    status_code: int
    request_id: Optional[str]
    headers: Dict[str, str] = field(default_factory=dict)


class MagpieObject(BaseModel):
    """Base for API objects; unknown fields sent by the API are kept."""

    model_config = ConfigDict(extra="allow")

    _last_response: Optional[LastResponse] = PrivateAttr(default=None)

    @property
    def last_response(self) -> Optional[LastResponse]:
        return self._last_response


class Branding(MagpieObject):
    icon: Optional[str] = None
    logo: Optional[str] = None
    use_logo: bool = False
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


class LineItem(MagpieObject):
    amount: Optional[int] = None
    description: Optional[str] = None
    image: Optional[str] = None
    quantity: int = 1


class SourceRedirect(MagpieObject):
    success: Optional[str] = None
    fail: Optional[str] = None
    notify: Optional[str] = None


class SourceOwner(MagpieObject):
    name: Optional[str] = None
    address_country: Optional[str] = None
    billing: Optional[Dict[str, Any]] = None
    shipping: Optional[Dict[str, Any]] = None


class SourceCard(MagpieObject):
    id: Optional[str] = None
    name: Optional[str] = None
    last4: Optional[str] = None
    exp_month: Optional[str] = None
    exp_year: Optional[str] = None
    brand: Optional[str] = None
    country: Optional[str] = None
    cvc_checked: Optional[str] = None
    funding: Optional[str] = None
    issuing_bank: Optional[str] = None


class SourceBankAccount(MagpieObject):
    reference_id: Optional[str] = None
    bank_type: Optional[str] = None
    bank_code: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    account_type: Optional[str] = None
    expires_at: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


# Values Magpie sends today. Model fields are typed as plain str so a new
# value from the API does not fail an otherwise successful call.
SourceType = Literal["card", "bpi", "qrph", "gcash", "maya", "paymaya"]
RefundStatus = Literal["pending", "succeeded", "failed"]
CheckoutMode = Literal["payment", "setup", "subscription", "save_card"]
CheckoutPaymentStatus = Literal["paid", "unpaid", "expired", "authorized", "voided"]
OrganizationStatus = Literal["approved", "pending", "rejected"]


class Source(MagpieObject):
    id: str
    object: str = "source"
    type: Optional[str] = None
    card: Optional[SourceCard] = None
    bank_account: Optional[SourceBankAccount] = None
    redirect: Optional[SourceRedirect] = None
    owner: Optional[SourceOwner] = None
    vaulted: bool = False
    used: bool = False
    livemode: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class Customer(MagpieObject):
    id: str
    object: str = "customer"
    email: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    mobile_number: Optional[str] = None
    livemode: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    sources: List[Source] = Field(default_factory=list)


class Refund(MagpieObject):
    id: str
    object: str = "refund"
    amount: Optional[int] = None
    currency: Optional[str] = None
    reason: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ChargeAction(MagpieObject):
    type: Optional[str] = None
    url: Optional[str] = None


class ChargeFailure(MagpieObject):
    reason: Optional[str] = None
    code: Optional[str] = None
    next_steps: Optional[str] = None
    provider_response: Optional[Dict[str, Any]] = None


class Charge(MagpieObject):
    id: str
    object: str = "charge"
    amount: Optional[int] = None
    amount_refunded: int = 0
    authorized: bool = False
    captured: bool = False
    currency: Optional[str] = None
    statement_descriptor: Optional[str] = None
    description: Optional[str] = None
    source: Optional[Source] = None
    require_auth: bool = False
    owner: Optional[SourceOwner] = None
    action: Optional[ChargeAction] = None
    refunds: List[Refund] = Field(default_factory=list)
    livemode: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    failure_data: Optional[ChargeFailure] = None


class CheckoutSession(MagpieObject):
    id: str
    object: str = "checkout_session"
    amount_subtotal: Optional[int] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    mode: Optional[str] = None
    payment_status: Optional[str] = None
    payment_url: Optional[str] = None
    payment_method_types: List[str] = Field(default_factory=list)
    line_items: List[LineItem] = Field(default_factory=list)
    success_url: Optional[str] = None
    cancel_url: Optional[str] = None
    client_reference_id: Optional[str] = None
    customer: Optional[str] = None
    customer_email: Optional[str] = None
    payment_details: Optional[Charge] = None
    livemode: bool = False
    created_at: Optional[str] = None
    expires_at: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PaymentLinkItem(LineItem):
    remaining: Optional[int] = None


class PaymentLink(MagpieObject):
    id: str
    object: str = "payment_link"
    active: bool = True
    allow_adjustable_quantity: bool = False
    branding: Optional[Branding] = None
    created: Optional[int] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    expiry: Optional[str] = None
    internal_name: Optional[str] = None
    line_items: List[PaymentLinkItem] = Field(default_factory=list)
    livemode: bool = False
    maximum_payments: Optional[int] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    payment_method_types: List[str] = Field(default_factory=list)
    redirect_url: Optional[str] = None
    require_auth: bool = False
    updated: Optional[int] = None
    url: Optional[str] = None


class PaymentRequest(MagpieObject):
    id: str
    object: str = "payment_request"
    currency: Optional[str] = None
    customer: Optional[str] = None
    customer_email: Optional[str] = None
    delivery_methods: List[str] = Field(default_factory=list)
    delivered: Optional[Dict[str, bool]] = None
    line_items: List[LineItem] = Field(default_factory=list)
    livemode: bool = False
    message: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    number: Optional[str] = None
    paid: bool = False
    paid_at: Optional[int] = None
    payment_details: Optional[Charge] = None
    payment_method_types: List[str] = Field(default_factory=list)
    payment_request_url: Optional[str] = None
    subtotal: Optional[int] = None
    total: Optional[int] = None
    voided: bool = False
    voided_at: Optional[int] = None
    void_reason: Optional[str] = None


class Organization(MagpieObject):
    id: str
    object: str = "organization"
    title: Optional[str] = None
    account_name: Optional[str] = None
    statement_descriptor: Optional[str] = None
    pk_test_key: Optional[str] = None
    pk_live_key: Optional[str] = None
    sk_test_key: Optional[str] = None
    sk_live_key: Optional[str] = None
    branding: Optional[Dict[str, Any]] = None
    status: Optional[str] = None
    business_address: Optional[str] = None
    payment_method_settings: Dict[str, Any] = Field(default_factory=dict)
    rates: Dict[str, Any] = Field(default_factory=dict)
    payout_settings: Optional[Dict[str, Any]] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


WebhookEventType = Literal[
    "customer.created",
    "customer.updated",
    "customer.deleted",
    "source.created",
    "source.updated",
    "source.deleted",
    "charge.created",
    "charge.updated",
    "charge.succeeded",
    "charge.failed",
    "charge.captured",
    "charge.disputed",
    "refund.created",
    "refund.updated",
    "payment_request.created",
    "payment_request.updated",
    "payment_request.succeeded",
    "payment_request.failed",
    "checkout_session.created",
    "checkout_session.completed",
    "checkout_session.expired",
    "payment_link.created",
    "payment_link.updated",
]


class WebhookEventData(BaseModel, Generic[T]):
    model_config = ConfigDict(extra="allow")

    object: T


class WebhookEventRequest(BaseModel):
    id: Optional[str] = None
    idempotency_key: Optional[str] = None


class WebhookEvent(BaseModel, Generic[T]):
    model_config = ConfigDict(extra="allow")

    id: str
    # Free-form; see WebhookEventType for the types Magpie currently sends.
    type: str
    data: WebhookEventData[T]
    created: int
    livemode: bool = False
    api_version: Optional[str] = None
    pending_webhooks: Optional[int] = None
    request: Optional[WebhookEventRequest] = None


__all__ = [
    "Branding",
    "Charge",
    "ChargeAction",
    "ChargeFailure",
    "CheckoutMode",
    "CheckoutPaymentStatus",
    "CheckoutSession",
    "Customer",
    "LastResponse",
    "LineItem",
    "MagpieObject",
    "Organization",
    "OrganizationStatus",
    "PaymentLink",
    "PaymentLinkItem",
    "PaymentRequest",
    "Refund",
    "RefundStatus",
    "Source",
    "SourceBankAccount",
    "SourceCard",
    "SourceOwner",
    "SourceRedirect",
    "SourceType",
    "WebhookEvent",
    "WebhookEventData",
    "WebhookEventRequest",
    "WebhookEventType",
]
