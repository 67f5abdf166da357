"""Hosted checkout sessions, served from the checkout origin."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import CheckoutSession
from .base import BaseResource

CHECKOUT_BASE_URL = "https://new.pay.magpie.im"


class CheckoutSessionsResource(BaseResource[CheckoutSession]):
    model = CheckoutSession

    def __init__(self, client) -> None:
        super().__init__(client, "", CHECKOUT_BASE_URL)

    async def create(self, params: Dict[str, Any], options: Optional[Any] = None) -> CheckoutSession:
        return await self._create(params, options)

    async def retrieve(self, id: str, options: Optional[Any] = None) -> CheckoutSession:
        return await self._retrieve(id, options)

    async def capture(self, id: str, params: Dict[str, Any], options: Optional[Any] = None) -> CheckoutSession:
        return await self._request("POST", self._path(id, "capture"), params, options)

    async def expire(self, id: str, options: Optional[Any] = None) -> CheckoutSession:
        return await self._request("POST", self._path(id, "expire"), None, options)


class CheckoutResource:
    def __init__(self, client) -> None:
        self.sessions = CheckoutSessionsResource(client)


__all__ = ["CHECKOUT_BASE_URL", "CheckoutResource", "CheckoutSessionsResource"]
