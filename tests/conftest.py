"""
Shared fixtures: a scripted httpx transport that records every request
"""
import json
from typing import Any, List

import httpx
import pytest


class ScriptedServer:
    """Answers requests from a queue of prepared responses and records what it saw."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._responses: List[Any] = []

    def reply(self, body: Any = None, status_code: int = 200, text: str = None) -> "ScriptedServer":
        if text is not None:
            self._responses.append(httpx.Response(status_code, text=text))
        else:
            self._responses.append(httpx.Response(status_code, json=body))
        return self

    def fail(self, exc_type=httpx.ConnectError, message: str = "connection refused") -> "ScriptedServer":
        self._responses.append((exc_type, message))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0)
        if isinstance(item, tuple):
            exc_type, message = item
            raise exc_type(message, request=request)
        return item

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_payload(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def server():
    return ScriptedServer()
