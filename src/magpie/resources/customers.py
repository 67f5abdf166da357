"""Customer records and their attached payment sources."""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

from ..models import Customer
from .base import BaseResource


def _with_name_in_metadata(params: Dict[str, Any]) -> Dict[str, Any]:
    # The API has no name field; it is stored under metadata["name"].
    outgoing = dict(params)
    name = outgoing.pop("name", None)
    metadata = dict(outgoing.get("metadata") or {})
    if name is not None:
        metadata["name"] = name
    outgoing["metadata"] = metadata
    return outgoing


def _lift_name(customer: Customer) -> Customer:
    name = customer.metadata.get("name")
    if name:
        customer.name = name
    return customer


class CustomersResource(BaseResource[Customer]):
    model = Customer

    def __init__(self, client) -> None:
        super().__init__(client, "/customers")

    async def create(self, params: Dict[str, Any], options: Optional[Any] = None) -> Customer:
        return _lift_name(await self._create(_with_name_in_metadata(params), options))

    async def retrieve(self, id: str, options: Optional[Any] = None) -> Customer:
        return _lift_name(await self._retrieve(id, options))

    async def update(self, id: str, params: Dict[str, Any], options: Optional[Any] = None) -> Customer:
        return _lift_name(await self._update(id, _with_name_in_metadata(params), options))

    async def retrieve_by_email(self, email: str, options: Optional[Any] = None) -> Customer:
        path = f"{self._path()}/by_email/{quote(email, safe='@')}"
        return _lift_name(await self._request("GET", path, None, options))

    async def attach_source(self, id: str, source: str, options: Optional[Any] = None) -> Customer:
        return _lift_name(await self._request("POST", self._path(id, "sources"), {"source": source}, options))

    async def detach_source(self, id: str, source: str, options: Optional[Any] = None) -> Customer:
        path = self._path(id, "sources", quote(source, safe=""))
        return _lift_name(await self._request("DELETE", path, None, options))


__all__ = ["CustomersResource"]
