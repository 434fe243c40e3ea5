from __future__ import annotations
from typing import Optional
from urllib.parse import urlparse

from .errors import ConfigurationError


def parse_endpoint(u: str) -> str:
    """Return the endpoint unchanged if it is an absolute http(s) URL."""
    p = urlparse(u)
    if p.scheme not in ("http", "https") or not p.netloc:
        raise ConfigurationError(f"Not an absolute http(s) URL: {u!r}")
    return u


def is_secure(u: str) -> bool:
    return urlparse(u).scheme == "https"


def join_url(base: str, path: str) -> str:
    """Join a base URL and a relative path with exactly one slash."""
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def mask_token(tok: Optional[str]) -> str:
    if not tok:
        return "-"
    t = tok.strip()
    if len(t) <= 8:
        return "***"
    return f"{t[:4]}…{t[-4:]}"
