"""Payment sources (cards, e-wallets, bank redirects)."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import Source
from .base import BaseResource


class SourcesResource(BaseResource[Source]):
    model = Source

    def __init__(self, client) -> None:
        super().__init__(client, "/sources")

    async def create(self, params: Dict[str, Any], options: Optional[Any] = None) -> Source:
        return await self._create(params, options)

    async def retrieve(self, id: str, options: Optional[Any] = None) -> Source:
        return await self._retrieve(id, options)


__all__ = ["SourcesResource"]
