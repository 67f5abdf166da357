"""Async HTTP engine shared by every Magpie resource."""

from __future__ import annotations

import asyncio
import dataclasses
import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

from .config import ClientConfig
from .errors import ErrorType, MagpieError
from .idempotency import is_valid_idempotency_key
from .logging import build_request_log, build_response_log, build_retry_log, log_debug_event, logger
from .retry import calculate_retry_delay, should_retry

BODY_METHODS = ("POST", "PUT", "PATCH")
IDEMPOTENCY_HEADER = "X-Idempotency-Key"
KEY_PREFIXES = ("sk_", "pk_")


@dataclass
class RequestOptions:
    idempotency_key: Optional[str] = None
    expand: Optional[List[str]] = None
    retryable: bool = True
    # Per-call transport overrides. base_url replaces the whole request
    # root, api version included.
    base_url: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    timeout_ms: Optional[float] = None

    @classmethod
    def coerce(cls, options: Union["RequestOptions", Mapping[str, Any], None]) -> "RequestOptions":
        if options is None:
            return cls()
        if isinstance(options, RequestOptions):
            return options
        return cls(**dict(options))


@dataclass
class RequestAttempt:
    method: str
    url: str
    headers: Dict[str, str]
    params: Dict[str, Any]
    content: Optional[bytes]
    attempt: int
    started_at: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.started_at) * 1000


@dataclass
class ApiResponse:
    data: Any
    status: int
    headers: Dict[str, str]
    request_id: Optional[str]


def _validate_key(key: Any, prefixes: tuple[str, ...], message: str) -> str:
    if not key or not isinstance(key, str):
        raise MagpieError.configuration("Missing or invalid API key")
    if not key.startswith(prefixes):
        raise MagpieError.configuration(message)
    return key


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class BaseClient:
    def __init__(
        self,
        secret_key: str,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = _validate_key(secret_key, ("sk_",), "Invalid secret key - must start with sk_")
        self._config = config or ClientConfig()
        self._client = httpx.AsyncClient(
            base_url=self._config.root_url,
            timeout=self._config.timeout_ms / 1000,
            transport=transport,
        )

    async def __aenter__(self) -> "BaseClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def get_config(self) -> ClientConfig:
        return self._config

    def get_api_key(self) -> str:
        return self._api_key

    def set_api_key(self, api_key: str) -> None:
        self._api_key = _validate_key(api_key, KEY_PREFIXES, "Invalid API key - must start with sk_ or pk_")

    def set_debug(self, debug: bool) -> None:
        self._config = dataclasses.replace(self._config, debug=debug)

    def _headers(self, method: str, options: RequestOptions) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self._config.user_agent,
            "X-API-Version": self._config.api_version,
        }
        if method in BODY_METHODS:
            headers["Content-Type"] = "application/json"
        headers.update(self._config.headers)
        headers.update(options.headers)
        if options.idempotency_key:
            headers[IDEMPOTENCY_HEADER] = options.idempotency_key
        return headers

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: Union[RequestOptions, Mapping[str, Any], None] = None,
    ) -> ApiResponse:
        method = method.upper()
        opts = RequestOptions.coerce(options)
        if opts.idempotency_key is not None and not is_valid_idempotency_key(opts.idempotency_key):
            raise MagpieError(
                "Idempotency key must be a string of 1 to 255 characters",
                ErrorType.INVALID_REQUEST_ERROR,
                code="idempotency_key_invalid",
            )
        config = self._config
        auth = httpx.BasicAuth(self._api_key, "")

        if not path.startswith("/"):
            path = f"/{path}"
        root = (opts.base_url or config.root_url).rstrip("/")
        url = f"{root}{path}"

        params: Dict[str, Any] = {}
        content: Optional[bytes] = None
        if method in BODY_METHODS and body is not None:
            content = json.dumps(body, separators=(",", ":")).encode("utf-8")
        elif body:
            params.update(body)
        if opts.expand:
            params["expand"] = list(opts.expand)

        headers = self._headers(method, opts)
        has_idempotency_key = any(name.lower() == IDEMPOTENCY_HEADER.lower() for name in headers)
        timeout_ms = opts.timeout_ms if opts.timeout_ms is not None else config.timeout_ms

        attempt_count = 0
        while True:
            attempt = RequestAttempt(
                method=method,
                url=url,
                headers=dict(headers),
                params=dict(params),
                content=content,
                attempt=attempt_count + 1,
            )
            if config.debug:
                log_debug_event(
                    build_request_log(
                        method=method,
                        url=url,
                        attempt=attempt.attempt,
                        headers=attempt.headers,
                        params=attempt.params,
                        body=body if content is not None else None,
                    )
                )

            status_code: Optional[int] = None
            error_code: Optional[str] = None
            cause: Optional[BaseException] = None
            try:
                response = await self._send(attempt, auth, timeout_ms)
            except httpx.TransportError as exc:
                error = MagpieError.from_transport_error(exc)
                error_code = error.code
                cause = exc
                if config.debug:
                    logger.error(
                        "Magpie request failed method=%s url=%s code=%s attempt=%s",
                        method,
                        url,
                        error_code,
                        attempt.attempt,
                    )
            else:
                data = _decode_body(response)
                if config.debug:
                    log_debug_event(
                        build_response_log(
                            method=method,
                            url=url,
                            status=response.status_code,
                            duration_ms=attempt.elapsed_ms(),
                            headers=response.headers,
                            data=data,
                        )
                    )
                if 200 <= response.status_code < 300:
                    return ApiResponse(
                        data=data,
                        status=response.status_code,
                        headers=dict(response.headers),
                        request_id=response.headers.get("request-id") or response.headers.get("x-request-id"),
                    )
                error = MagpieError.from_response(response)
                status_code = response.status_code

            retry = should_retry(
                method=method,
                attempt_count=attempt_count,
                max_retries=config.max_retries,
                retryable=opts.retryable,
                has_idempotency_key=has_idempotency_key,
                status_code=status_code,
                error_code=error_code,
            )
            if not retry:
                if cause is not None:
                    raise error from cause
                raise error

            attempt_count += 1
            delay_ms = calculate_retry_delay(attempt_count, config.retry_delay_ms)
            if config.debug:
                log_debug_event(
                    build_retry_log(
                        method=method,
                        url=url,
                        retry_count=attempt_count,
                        max_retries=config.max_retries,
                        delay_ms=delay_ms,
                        reason=str(status_code) if status_code is not None else str(error_code),
                    )
                )
            await asyncio.sleep(delay_ms / 1000)

    async def _send(self, attempt: RequestAttempt, auth: httpx.Auth, timeout_ms: float) -> httpx.Response:
        request = self._client.build_request(
            attempt.method,
            attempt.url,
            params=attempt.params or None,
            content=attempt.content,
            headers=attempt.headers,
            timeout=timeout_ms / 1000,
        )
        return await self._client.send(request, auth=auth)

    async def get(self, path: str, params: Any = None, options: Any = None) -> ApiResponse:
        return await self.request("GET", path, params, options)

    async def post(self, path: str, data: Any = None, options: Any = None) -> ApiResponse:
        return await self.request("POST", path, data, options)

    async def put(self, path: str, data: Any = None, options: Any = None) -> ApiResponse:
        return await self.request("PUT", path, data, options)

    async def patch(self, path: str, data: Any = None, options: Any = None) -> ApiResponse:
        return await self.request("PATCH", path, data, options)

    async def delete(self, path: str, data: Any = None, options: Any = None) -> ApiResponse:
        return await self.request("DELETE", path, data, options)

    async def ping(self) -> bool:
        try:
            await self.get("/ping")
        except MagpieError:
            return False
        return True

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["ApiResponse", "BaseClient", "RequestAttempt", "RequestOptions"]
