from __future__ import annotations

from typing import Any, Callable, Dict, List

import httpx

from magpie import ClientConfig, Magpie

Handler = Callable[[httpx.Request], httpx.Response]


def make_magpie(handler: Handler, key: str = "sk_test_123", **config: Any) -> Magpie:
    defaults: Dict[str, Any] = dict(base_url="https://api.example.com", api_version="v2", retry_delay_ms=0)
    defaults.update(config)
    return Magpie(key, ClientConfig(**defaults), transport=httpx.MockTransport(handler))


class Recorder:
    """Collects every request and replays a scripted list of responses."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.requests: List[httpx.Request] = []
        self._responses = list(responses) or [httpx.Response(200, json={})]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self._responses)) - 1
        scripted = self._responses[index]
        return httpx.Response(scripted.status_code, headers=scripted.headers, content=scripted.content)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]
