"""Reusable payment links, served from the payment-links origin."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import PaymentLink
from .base import BaseResource

PAYMENT_LINKS_BASE_URL = "https://buy.magpie.im/api/v1"


class PaymentLinksResource(BaseResource[PaymentLink]):
    model = PaymentLink

    def __init__(self, client) -> None:
        super().__init__(client, "/links", PAYMENT_LINKS_BASE_URL)

    async def create(self, params: Dict[str, Any], options: Optional[Any] = None) -> PaymentLink:
        return await self._create(params, options)

    async def retrieve(self, id: str, options: Optional[Any] = None) -> PaymentLink:
        return await self._retrieve(id, options)

    async def update(self, id: str, params: Dict[str, Any], options: Optional[Any] = None) -> PaymentLink:
        return await self._update(id, params, options)

    async def activate(self, id: str, options: Optional[Any] = None) -> PaymentLink:
        return await self._request("POST", self._path(id, "activate"), None, options)

    async def deactivate(self, id: str, options: Optional[Any] = None) -> PaymentLink:
        return await self._request("POST", self._path(id, "deactivate"), None, options)


__all__ = ["PAYMENT_LINKS_BASE_URL", "PaymentLinksResource"]
