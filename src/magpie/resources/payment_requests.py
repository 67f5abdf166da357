"""Payment requests sent to customers by email or SMS."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import PaymentRequest
from .base import BaseResource

PAYMENT_REQUESTS_BASE_URL = "https://request.magpie.im/api/v1"


class PaymentRequestsResource(BaseResource[PaymentRequest]):
    model = PaymentRequest

    def __init__(self, client) -> None:
        super().__init__(client, "/requests", PAYMENT_REQUESTS_BASE_URL)

    async def create(self, params: Dict[str, Any], options: Optional[Any] = None) -> PaymentRequest:
        return await self._create(params, options)

    async def retrieve(self, id: str, options: Optional[Any] = None) -> PaymentRequest:
        return await self._retrieve(id, options)

    async def resend(self, id: str, options: Optional[Any] = None) -> PaymentRequest:
        return await self._request("POST", self._path(id, "resend"), None, options)

    async def void(self, id: str, params: Dict[str, Any], options: Optional[Any] = None) -> PaymentRequest:
        return await self._request("POST", self._path(id, "void"), params, options)


__all__ = ["PAYMENT_REQUESTS_BASE_URL", "PaymentRequestsResource"]
