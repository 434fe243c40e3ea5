from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Optional

import httpx

from .errors import TransportError, UnauthorizedError, JsonClientError
from .util import join_url, mask_token


log = logging.getLogger(__name__)

DEFAULT_AUTH_URL = "https://kbase.us/services/auth/"
TOKEN_PATH = "api/V2/token"
LOGIN_PATH = "api/legacy/KBase/Sessions/Login"


@dataclass(frozen=True)
class AuthToken:
    """Opaque bearer credential, optionally tagged with the user it belongs to."""

    token: str
    user_name: Optional[str] = None

    def __repr__(self) -> str:
        return f"AuthToken(token={mask_token(self.token)!r}, user_name={self.user_name!r})"


class AuthClient:
    """Validates tokens and exchanges user/password pairs for tokens."""

    def __init__(
        self,
        auth_url: Optional[str] = None,
        timeout_s: Optional[float] = 30.0,
        verify_tls: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.auth_url = auth_url or DEFAULT_AUTH_URL
        self._client = httpx.Client(timeout=timeout_s, verify=verify_tls, transport=transport)

    def validate_token(self, token: str) -> AuthToken:
        url = join_url(self.auth_url, TOKEN_PATH)
        log.debug("validating token %s against %s", mask_token(token), url)
        try:
            resp = self._client.get(url, headers={"Authorization": token})
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach auth service at {url}: {e}") from e
        if resp.status_code in (401, 403):
            raise UnauthorizedError(f"Token is not valid: {_error_message(resp)}")
        if resp.status_code != 200:
            raise TransportError(f"Auth service returned HTTP {resp.status_code}", status_code=resp.status_code)
        body = _json_body(resp)
        return AuthToken(token=token, user_name=body.get("user"))

    def login(self, user_id: str, password: str) -> AuthToken:
        url = join_url(self.auth_url, LOGIN_PATH)
        log.debug("logging in %s via %s", user_id, url)
        try:
            resp = self._client.post(
                url,
                data={"user_id": user_id, "password": password, "fields": "token,user_id"},
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach auth service at {url}: {e}") from e
        if resp.status_code in (401, 403):
            raise UnauthorizedError(f"Login failed for {user_id}: {_error_message(resp)}")
        if resp.status_code != 200:
            raise TransportError(f"Auth service returned HTTP {resp.status_code}", status_code=resp.status_code)
        body = _json_body(resp)
        token = body.get("token")
        if not token:
            raise UnauthorizedError(f"Login for {user_id} returned no token")
        return AuthToken(token=token, user_name=body.get("user_id") or user_id)

    def close(self) -> None:
        self._client.close()


def _json_body(resp: httpx.Response) -> dict:
    try:
        body = resp.json()
    except ValueError as e:
        raise JsonClientError(f"Auth service response is not JSON: {e}") from e
    if not isinstance(body, dict):
        raise JsonClientError("Auth service response is not a JSON object")
    return body


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict):
        return str(err.get("message") or err)
    if err:
        return str(err)
    return f"HTTP {resp.status_code}"
