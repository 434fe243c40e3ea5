from __future__ import annotations
from typing import Any, Optional


class JsonClientError(Exception):
    """Base class for every failure raised by the client."""


class ConfigurationError(JsonClientError):
    """Invalid client setup, e.g. a credential over plain http."""


class UnauthorizedError(JsonClientError):
    """Credential missing where required, or rejected by the auth service."""


class TransportError(JsonClientError, IOError):
    """Network, timeout, TLS or HTTP-level failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, method: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.method = method


class JsonRpcError(JsonClientError):
    """
    A JSON-RPC level failure.

    kind == "remote": the server answered with an ``error`` object; code,
    message and data are passed through verbatim.
    kind == "deserialize": the response could not be decoded into the
    expected result shape.
    """

    REMOTE = "remote"
    DESERIALIZE = "deserialize"

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Any = None,
        name: Optional[str] = None,
        server_error: Optional[str] = None,
        method: Optional[str] = None,
        kind: str = REMOTE,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data
        self.name = name
        self.server_error = server_error
        self.method = method
        self.kind = kind

    @property
    def is_remote(self) -> bool:
        return self.kind == self.REMOTE

    def __str__(self) -> str:
        where = f"{self.method}: " if self.method else ""
        if self.kind == self.DESERIALIZE:
            return f"{where}could not decode response: {self.message}"
        return f"{where}{self.message} (code {self.code})"


class ProtocolViolationError(JsonClientError):
    """Single-valued call answered with a result array whose length is not 1."""

    def __init__(self, method: str, length: int) -> None:
        super().__init__(f"{method}: expected a single-element result array, got {length} element(s)")
        self.method = method
        self.length = length
