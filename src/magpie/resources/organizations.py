"""The organization that owns the API key."""

from __future__ import annotations

from typing import Any, Optional

from ..models import Organization
from .base import BaseResource


class OrganizationsResource(BaseResource[Organization]):
    model = Organization

    def __init__(self, client) -> None:
        super().__init__(client, "/me")

    async def me(self, options: Optional[Any] = None) -> Organization:
        return await self._request("GET", self._path(), None, options)


__all__ = ["OrganizationsResource"]
