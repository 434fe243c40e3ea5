"""JSON-RPC 1.x envelope used by the service: positional params, array results."""
from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict


class MethodCall(BaseModel):
    """One frame of the provenance call stack carried in a call context."""

    model_config = ConfigDict(extra="allow")

    time: Optional[str] = None
    method: Optional[str] = None
    job_id: Optional[str] = None


class RpcContext(BaseModel):
    """Per-call metadata. Extra key/value tags are preserved on the wire."""

    model_config = ConfigDict(extra="allow")

    call_stack: Optional[List[MethodCall]] = None
    run_id: Optional[str] = None


class RpcRequest(BaseModel):
    method: str
    params: List[Any]
    version: Optional[str] = None
    context: Optional[List[RpcContext]] = None

    def to_wire(self) -> Dict[str, Any]:
        # params are already plain JSON; only the envelope's own optional keys are dropped
        wire: Dict[str, Any] = {"method": self.method, "params": self.params}
        if self.version is not None:
            wire["version"] = self.version
        if self.context:
            wire["context"] = [c.model_dump(mode="json", exclude_none=True) for c in self.context]
        return wire


class RpcErrorBody(BaseModel):
    model_config = ConfigDict(extra="allow")

    # servers are loose about these types; anything under "error" is still a remote error
    code: Any = None
    message: Any = None
    data: Any = None
    name: Any = None
    error: Any = None


class RpcResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    result: Any = None
    error: Optional[RpcErrorBody] = None


def versioned_method(method: str, version: Optional[str] = None) -> str:
    """Append the pinned dispatch version: "Service.method:1.2.0"."""
    if version:
        return f"{method}:{version}"
    return method
