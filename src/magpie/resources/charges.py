"""Charges: creation, capture of authorizations, voids and refunds."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import Charge
from .base import BaseResource


class ChargesResource(BaseResource[Charge]):
    model = Charge

    def __init__(self, client) -> None:
        super().__init__(client, "/charges")

    async def create(self, params: Dict[str, Any], options: Optional[Any] = None) -> Charge:
        """Create a charge; pass ``capture=False`` to only authorize it."""
        return await self._create(params, options)

    async def retrieve(self, id: str, options: Optional[Any] = None) -> Charge:
        return await self._retrieve(id, options)

    async def capture(self, id: str, params: Dict[str, Any], options: Optional[Any] = None) -> Charge:
        """Capture all or part of an authorized charge."""
        return await self._request("POST", self._path(id, "capture"), params, options)

    async def void(self, id: str, options: Optional[Any] = None) -> Charge:
        """Release an authorization that has not been captured."""
        return await self._request("POST", self._path(id, "void"), None, options)

    async def refund(self, id: str, params: Dict[str, Any], options: Optional[Any] = None) -> Charge:
        return await self._request("POST", self._path(id, "refund"), params, options)

    async def verify(self, id: str, params: Dict[str, Any], options: Optional[Any] = None) -> Charge:
        """Confirm a charge that requires an OTP (``confirmation_id`` and ``otp``)."""
        return await self._request("POST", self._path(id, "verify"), params, options)


__all__ = ["ChargesResource"]
