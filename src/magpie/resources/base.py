"""Shared plumbing for resource classes."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Dict, Generic, Optional, Type, TypeVar
from urllib.parse import quote

from pydantic import ValidationError

from ..client import ApiResponse, RequestOptions
from ..errors import ErrorType, MagpieError
from ..models import LastResponse, MagpieObject

if TYPE_CHECKING:
    from ..client import BaseClient

ModelT = TypeVar("ModelT", bound=MagpieObject)


class BaseResource(Generic[ModelT]):
    """CRUD helpers over ``BaseClient.request`` for one API collection.

    ``base_url`` is set by resources hosted on a different origin than the
    main API; it replaces the versioned root for every call they make.
    """

    model: Type[ModelT]

    def __init__(self, client: "BaseClient", base_path: str, base_url: Optional[str] = None) -> None:
        self._client = client
        self._base_path = base_path.rstrip("/")
        self._base_url = base_url

    def _path(self, id: Optional[str] = None, *segments: str) -> str:
        parts = [self._base_path]
        if id is not None:
            parts.append(quote(id, safe=""))
        parts.extend(segments)
        return "/".join(parts) or "/"

    def _options(self, options: Any) -> RequestOptions:
        opts = RequestOptions.coerce(options)
        if self._base_url and not opts.base_url:
            opts = dataclasses.replace(opts, base_url=self._base_url)
        return opts

    def _wrap(self, response: ApiResponse, model: Optional[Type[ModelT]] = None) -> ModelT:
        model = model or self.model
        try:
            obj = model.model_validate(response.data)
        except ValidationError as exc:
            raise MagpieError(
                f"Unexpected {model.__name__} payload in API response",
                ErrorType.API_ERROR,
                code="unexpected_response",
                status_code=response.status,
                request_id=response.request_id,
                headers=response.headers,
            ) from exc
        obj._last_response = LastResponse(
            status_code=response.status,
            request_id=response.request_id,
            headers=response.headers,
        )
        return obj

    async def _request(
        self,
        method: str,
        path: str,
        data: Any = None,
        options: Any = None,
    ) -> ModelT:
        response = await self._client.request(method, path, data, self._options(options))
        return self._wrap(response)

    async def _create(self, params: Dict[str, Any], options: Any = None) -> ModelT:
        return await self._request("POST", self._path(), params, options)

    async def _retrieve(self, id: str, options: Any = None) -> ModelT:
        return await self._request("GET", self._path(id), None, options)

    async def _update(self, id: str, params: Dict[str, Any], options: Any = None) -> ModelT:
        return await self._request("PUT", self._path(id), params, options)


__all__ = ["BaseResource"]
