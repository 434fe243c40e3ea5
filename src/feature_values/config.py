from __future__ import annotations
from dataclasses import dataclass
import os
from typing import Optional, Mapping

from .errors import ConfigurationError


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _env_flag(name: str) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


@dataclass
class Settings:
    """Client-wide call configuration. Callers snapshot it at the start of each call."""

    timeout_s: Optional[float] = None
    insecure_http_allowed: bool = False
    trust_all_certificates: bool = False
    streaming_mode: bool = False
    service_version: Optional[str] = None
    rpc_version: Optional[str] = None
    extra_headers: Optional[Mapping[str, str]] = None

    @property
    def effective_timeout(self) -> Optional[float]:
        # zero means "no timeout", same as None
        if not self.timeout_s:
            return None
        return self.timeout_s

    @classmethod
    def from_env(cls) -> "Settings":
        timeout: Optional[float] = None
        raw_timeout = os.environ.get("FEATURE_VALUES_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(f"FEATURE_VALUES_TIMEOUT must be a number, got {raw_timeout!r}")
            if timeout < 0:
                raise ConfigurationError("FEATURE_VALUES_TIMEOUT must not be negative")
        return cls(
            timeout_s=timeout,
            insecure_http_allowed=_env_flag("FEATURE_VALUES_INSECURE_HTTP"),
            trust_all_certificates=_env_flag("FEATURE_VALUES_TRUST_ALL_CERTS"),
            streaming_mode=_env_flag("FEATURE_VALUES_STREAMING"),
            service_version=os.environ.get("FEATURE_VALUES_SERVICE_VERSION") or None,
        )
