"""Structured errors raised by the Magpie SDK."""

from __future__ import annotations

import socket
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import httpx


class ErrorType(str, Enum):
    API_ERROR = "api_error"
    AUTHENTICATION_ERROR = "authentication_error"
    CARD_ERROR = "card_error"
    IDEMPOTENCY_ERROR = "idempotency_error"
    INVALID_REQUEST_ERROR = "invalid_request_error"
    RATE_LIMIT_ERROR = "rate_limit_error"
    VALIDATION_ERROR = "validation_error"
    PERMISSION_ERROR = "permission_error"
    NETWORK_ERROR = "network_error"
    NOT_FOUND_ERROR = "not_found_error"
    TIMEOUT_ERROR = "timeout_error"
    CONFIGURATION_ERROR = "configuration_error"

    @classmethod
    def parse(cls, value: Any) -> Optional["ErrorType"]:
        """Return the member for ``value`` or None when it is outside the closed set."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


STATUS_ERROR_TYPES: Dict[int, ErrorType] = {
    400: ErrorType.INVALID_REQUEST_ERROR,
    401: ErrorType.AUTHENTICATION_ERROR,
    403: ErrorType.PERMISSION_ERROR,
    404: ErrorType.NOT_FOUND_ERROR,
    409: ErrorType.IDEMPOTENCY_ERROR,
    422: ErrorType.VALIDATION_ERROR,
    429: ErrorType.RATE_LIMIT_ERROR,
}

# Transport failure codes produced by classify_transport_error.
DNS_ERROR = "dns_error"
CONNECTION_RESET = "connection_reset"
CONNECTION_REFUSED = "connection_refused"
BROKEN_PIPE = "broken_pipe"
TIMEOUT = "timeout"
NETWORK_ERROR = "network_error"

TRANSPORT_ERROR_TYPES: Dict[str, ErrorType] = {
    DNS_ERROR: ErrorType.NETWORK_ERROR,
    CONNECTION_RESET: ErrorType.NETWORK_ERROR,
    CONNECTION_REFUSED: ErrorType.NETWORK_ERROR,
    BROKEN_PIPE: ErrorType.NETWORK_ERROR,
    TIMEOUT: ErrorType.TIMEOUT_ERROR,
}

_RETRYABLE_TYPES = frozenset(
    {
        ErrorType.API_ERROR,
        ErrorType.RATE_LIMIT_ERROR,
        ErrorType.NETWORK_ERROR,
        ErrorType.TIMEOUT_ERROR,
    }
)


def map_status_to_type(status: Optional[int], api_type: Any = None) -> ErrorType:
    """Pick the error type for a response, preferring a known type sent by the API."""
    explicit = ErrorType.parse(api_type) if api_type else None
    if explicit is not None:
        return explicit
    if not status:
        return ErrorType.API_ERROR
    return STATUS_ERROR_TYPES.get(status, ErrorType.API_ERROR)


def classify_transport_error(exc: BaseException) -> str:
    """Reduce an httpx transport failure to one of the transport codes above.

    The exception chain is inspected first so the underlying socket error
    decides; httpx's own exception class is the fallback.
    """
    if isinstance(exc, httpx.TimeoutException):
        return TIMEOUT
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return DNS_ERROR
        if isinstance(current, ConnectionRefusedError):
            return CONNECTION_REFUSED
        if isinstance(current, ConnectionResetError):
            return CONNECTION_RESET
        if isinstance(current, BrokenPipeError):
            return BROKEN_PIPE
        if isinstance(current, TimeoutError):
            return TIMEOUT
        current = current.__cause__ or current.__context__
    if isinstance(exc, httpx.ConnectError):
        return CONNECTION_REFUSED
    if isinstance(exc, (httpx.ReadError, httpx.RemoteProtocolError)):
        return CONNECTION_RESET
    if isinstance(exc, httpx.WriteError):
        return BROKEN_PIPE
    return NETWORK_ERROR


class MagpieError(Exception):
    """Every failure surfaced by the SDK.

    The closed ``type`` tag is the discriminant; the remaining fields are
    optional details copied from the API response when there was one.
    Instances are read-only once built.
    """

    def __init__(
        self,
        message: str,
        type: ErrorType | str = ErrorType.API_ERROR,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        request_id: Optional[str] = None,
        param: Optional[str] = None,
        doc_url: Optional[str] = None,
        decline_code: Optional[str] = None,
        charge_id: Optional[str] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._type = ErrorType(type)
        self._code = code
        self._status_code = status_code
        self._request_id = request_id
        self._param = param
        self._doc_url = doc_url
        self._decline_code = decline_code
        self._charge_id = charge_id
        self._headers = dict(headers) if headers is not None else None

    @property
    def message(self) -> str:
        return self._message

    @property
    def type(self) -> ErrorType:
        return self._type

    @property
    def code(self) -> Optional[str]:
        return self._code

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    @property
    def request_id(self) -> Optional[str]:
        return self._request_id

    @property
    def param(self) -> Optional[str]:
        return self._param

    @property
    def doc_url(self) -> Optional[str]:
        return self._doc_url

    @property
    def decline_code(self) -> Optional[str]:
        return self._decline_code

    @property
    def charge_id(self) -> Optional[str]:
        return self._charge_id

    @property
    def headers(self) -> Optional[Dict[str, Any]]:
        return dict(self._headers) if self._headers is not None else None

    def is_retryable(self) -> bool:
        return self._type in _RETRYABLE_TYPES

    def is_authentication_error(self) -> bool:
        return self._type is ErrorType.AUTHENTICATION_ERROR

    def is_validation_error(self) -> bool:
        return self._type in (ErrorType.VALIDATION_ERROR, ErrorType.INVALID_REQUEST_ERROR)

    def is_rate_limit_error(self) -> bool:
        return self._type is ErrorType.RATE_LIMIT_ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self._message,
            "type": self._type.value,
            "code": self._code,
            "status_code": self._status_code,
            "request_id": self._request_id,
            "param": self._param,
            "doc_url": self._doc_url,
            "decline_code": self._decline_code,
            "charge_id": self._charge_id,
            "headers": self.headers,
        }

    def __repr__(self) -> str:
        return (
            f"MagpieError(type={self._type.value!r}, code={self._code!r}, "
            f"status_code={self._status_code!r}, message={self._message!r})"
        )

    @classmethod
    def configuration(cls, message: str) -> "MagpieError":
        return cls(message, ErrorType.CONFIGURATION_ERROR, code="configuration_error")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "MagpieError":
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = None

        details: Dict[str, Any] = {}
        message: Any = None
        if isinstance(body, dict):
            nested = body.get("error")
            if isinstance(nested, dict):
                details = nested
                message = nested.get("message") or body.get("message")
            else:
                details = body
                message = body.get("message") or (nested if isinstance(nested, str) else None)
        elif isinstance(body, str) and body.strip():
            message = body

        if not message:
            message = f"HTTP {status} Error"

        return cls(
            str(message),
            map_status_to_type(status, details.get("type")),
            code=details.get("code") or f"http_{status}",
            status_code=status,
            request_id=response.headers.get("request-id") or response.headers.get("x-request-id"),
            param=details.get("param"),
            doc_url=details.get("doc_url"),
            decline_code=details.get("decline_code"),
            charge_id=details.get("charge_id"),
            headers=dict(response.headers),
        )

    @classmethod
    def from_transport_error(cls, exc: BaseException) -> "MagpieError":
        code = classify_transport_error(exc)
        message = str(exc) or "Network error occurred"
        return cls(message, TRANSPORT_ERROR_TYPES.get(code, ErrorType.NETWORK_ERROR), code=code)


__all__ = [
    "BROKEN_PIPE",
    "CONNECTION_REFUSED",
    "CONNECTION_RESET",
    "DNS_ERROR",
    "ErrorType",
    "MagpieError",
    "NETWORK_ERROR",
    "TIMEOUT",
    "classify_transport_error",
    "map_status_to_type",
]
