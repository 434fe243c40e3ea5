from .auth import AuthClient, AuthToken
from .client import FeatureValuesClient, SERVICE_NAME
from .config import Settings
from .envelope import MethodCall, RpcContext
from .errors import (
    ConfigurationError,
    JsonClientError,
    JsonRpcError,
    ProtocolViolationError,
    TransportError,
    UnauthorizedError,
)
from .jsonrpc_client import JsonClientCaller

__all__ = [
    "AuthClient",
    "AuthToken",
    "ConfigurationError",
    "FeatureValuesClient",
    "JsonClientCaller",
    "JsonClientError",
    "JsonRpcError",
    "MethodCall",
    "ProtocolViolationError",
    "RpcContext",
    "SERVICE_NAME",
    "Settings",
    "TransportError",
    "UnauthorizedError",
]
