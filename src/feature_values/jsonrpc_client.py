from __future__ import annotations
from dataclasses import replace
from functools import lru_cache
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .auth import AuthClient, AuthToken
from .config import Settings
from .envelope import RpcContext, RpcRequest, RpcResponse, versioned_method
from .errors import (
    ConfigurationError,
    JsonRpcError,
    TransportError,
    UnauthorizedError,
)
from .http_client import HttpClient
from .util import is_secure, mask_token, parse_endpoint


log = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _list_adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(List[result_type])


def to_jsonable(value: Any) -> Any:
    """Turn models (at any depth) into plain JSON values, dropping unset model fields."""
    return to_jsonable_python(value, exclude_none=True)


class JsonClientCaller:
    """
    Executes JSON-RPC calls against one service endpoint.

    The endpoint and credential are fixed at construction. Settings may be
    changed at any time; each call works on a snapshot taken when it starts.
    """

    def __init__(
        self,
        url: str,
        token: Union[AuthToken, str, None] = None,
        *,
        user_id: Optional[str] = None,
        password: Optional[str] = None,
        auth_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
        auth_client: Optional[AuthClient] = None,
    ) -> None:
        self._url = parse_endpoint(url)
        self._settings = replace(settings) if settings else Settings()
        self._lock = threading.Lock()
        self._response_file: Optional[Path] = None
        self._token = self._resolve_token(token, user_id, password, auth_url, auth_client)
        self._http = HttpClient(transport)

    def _resolve_token(
        self,
        token: Union[AuthToken, str, None],
        user_id: Optional[str],
        password: Optional[str],
        auth_url: Optional[str],
        auth_client: Optional[AuthClient],
    ) -> Optional[AuthToken]:
        if isinstance(token, AuthToken):
            return token
        if token is None and user_id is None:
            return None
        if token is not None and user_id is not None:
            raise ConfigurationError("Pass either a token or user credentials, not both")
        if user_id is not None and password is None:
            raise ConfigurationError(f"No password given for user {user_id}")
        owned = auth_client is None
        auth = auth_client or AuthClient(auth_url, verify_tls=not self._settings.trust_all_certificates)
        try:
            if token is not None:
                return auth.validate_token(token)
            return auth.login(user_id, password)
        finally:
            if owned:
                auth.close()

    # ---------- configuration ----------

    @property
    def url(self) -> str:
        return self._url

    @property
    def token(self) -> Optional[AuthToken]:
        return self._token

    @property
    def settings(self) -> Settings:
        """A copy of the current settings."""
        with self._lock:
            return replace(self._settings)

    def _update(self, **changes: Any) -> None:
        with self._lock:
            self._settings = replace(self._settings, **changes)

    def set_connection_read_timeout(self, seconds: Optional[float]) -> None:
        """None or 0 disables the timeout."""
        if seconds is not None and seconds < 0:
            raise ConfigurationError("Timeout must not be negative")
        self._update(timeout_s=seconds)

    def is_insecure_http_connection_allowed(self) -> bool:
        return self.settings.insecure_http_allowed

    def set_insecure_http_connection_allowed(self, allowed: bool) -> None:
        self._update(insecure_http_allowed=allowed)

    # older names for the two accessors above
    def is_auth_allowed_for_http(self) -> bool:
        return self.is_insecure_http_connection_allowed()

    def set_auth_allowed_for_http(self, allowed: bool) -> None:
        self.set_insecure_http_connection_allowed(allowed)

    def is_all_ssl_certificates_trusted(self) -> bool:
        return self.settings.trust_all_certificates

    def set_all_ssl_certificates_trusted(self, trust_all: bool) -> None:
        self._update(trust_all_certificates=trust_all)

    def is_streaming_mode_on(self) -> bool:
        return self.settings.streaming_mode

    def set_streaming_mode_on(self, streaming: bool) -> None:
        self._update(streaming_mode=streaming)

    @property
    def service_version(self) -> Optional[str]:
        return self.settings.service_version

    @service_version.setter
    def service_version(self, value: Optional[str]) -> None:
        self._update(service_version=value or None)

    def set_file_for_next_rpc_response(self, path: Union[str, Path, None]) -> None:
        """Copy the raw body of the next response to path. Used once, then cleared."""
        with self._lock:
            self._response_file = Path(path) if path is not None else None

    # ---------- calls ----------

    def call(
        self,
        method: str,
        args: Sequence[Any],
        result_type: Any = Any,
        has_result: bool = True,
        auth_required: bool = True,
        context: Optional[Sequence[RpcContext]] = None,
        service_version: Optional[str] = None,
    ) -> Optional[List[Any]]:
        """
        Call method with positional args.

        Returns the whole ``result`` array decoded as List[result_type], or
        None when has_result is False.
        """
        with self._lock:
            settings = replace(self._settings)
            response_file = self._response_file
            self._response_file = None

        if auth_required and self._token is None:
            raise UnauthorizedError(f"{method}: RPC method requires authentication but no credential is configured")
        if self._token is not None and not is_secure(self._url) and not settings.insecure_http_allowed:
            raise ConfigurationError(
                f"{method}: refusing to send credentials over insecure http to {self._url}; "
                "allow insecure http connections explicitly to override"
            )

        full_method = versioned_method(method, service_version or settings.service_version)
        try:
            params = to_jsonable(list(args))
        except PydanticSerializationError as e:
            raise ConfigurationError(f"{full_method}: parameters cannot be encoded as JSON: {e}") from e
        request = RpcRequest(
            method=full_method,
            params=params,
            version=settings.rpc_version,
            context=list(context) if context else None,
        )
        headers: Dict[str, str] = {}
        if self._token is not None:
            headers["Authorization"] = self._token.token

        log.debug(
            "calling %s at %s (token %s, streaming=%s)",
            full_method, self._url, mask_token(self._token.token if self._token else None), settings.streaming_mode,
        )
        try:
            resp = self._http.post_json(self._url, request.to_wire(), settings, headers)
        except httpx.HTTPError as e:
            raise TransportError(f"{full_method}: {e}", method=full_method) from e

        body = resp.content
        if response_file is not None:
            response_file.write_bytes(body)

        parsed = self._parse_envelope(full_method, resp.status_code, body)
        if parsed.error is not None:
            err = parsed.error
            raise JsonRpcError(
                "" if err.message is None else str(err.message),
                code=err.code,
                data=err.data,
                name=err.name,
                server_error=err.error,
                method=full_method,
            )
        if not resp.is_success:
            raise TransportError(
                f"{full_method}: HTTP {resp.status_code} without a JSON-RPC error",
                status_code=resp.status_code,
                method=full_method,
            )
        if not has_result:
            return None
        if not isinstance(parsed.result, list):
            raise JsonRpcError("result is not an array", method=full_method, kind=JsonRpcError.DESERIALIZE)
        try:
            return _list_adapter(result_type).validate_python(parsed.result)
        except ValidationError as e:
            raise JsonRpcError(str(e), method=full_method, kind=JsonRpcError.DESERIALIZE) from e

    def _parse_envelope(self, method: str, status_code: int, body: bytes) -> RpcResponse:
        try:
            data = json.loads(body)
        except ValueError as e:
            if not 200 <= status_code < 300:
                raise TransportError(f"{method}: HTTP {status_code}", status_code=status_code, method=method) from e
            raise JsonRpcError(f"response is not JSON: {e}", method=method, kind=JsonRpcError.DESERIALIZE) from e
        if not isinstance(data, dict):
            if not 200 <= status_code < 300:
                raise TransportError(f"{method}: HTTP {status_code}", status_code=status_code, method=method)
            raise JsonRpcError("response is not a JSON object", method=method, kind=JsonRpcError.DESERIALIZE)
        try:
            return RpcResponse.model_validate(data)
        except ValidationError as e:
            raise JsonRpcError(f"invalid JSON-RPC envelope: {e}", method=method, kind=JsonRpcError.DESERIALIZE) from e

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "JsonClientCaller":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
