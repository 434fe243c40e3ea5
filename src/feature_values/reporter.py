from __future__ import annotations
from typing import Any
from pydantic import BaseModel
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .errors import JsonClientError, JsonRpcError, ProtocolViolationError, TransportError
from .jsonrpc_client import to_jsonable


class Reporter:
    def __init__(self, console: Console) -> None:
        self.console = console

    def result(self, method: str, value: Any) -> None:
        if isinstance(value, BaseModel):
            value = to_jsonable(value)
        if value is None:
            body: Any = Text("(no result)", style="dim")
        elif isinstance(value, dict) and all(not isinstance(v, (dict, list)) for v in value.values()):
            body = Table(show_header=True, header_style="bold")
            body.add_column("Key", style="bold")
            body.add_column("Value")
            for k, v in value.items():
                body.add_row(str(k), str(v))
        else:
            body = JSON.from_data(to_jsonable(value))
        self.console.print(Panel.fit(body, title=Text(method, style="bold blue")))

    def error(self, exc: JsonClientError) -> None:
        table = Table(show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Kind", type(exc).__name__)
        if isinstance(exc, JsonRpcError):
            table.add_row("Method", exc.method or "-")
            table.add_row("Code", "-" if exc.code is None else str(exc.code))
            table.add_row("Message", exc.message)
            if exc.data is not None:
                table.add_row("Data", str(exc.data))
            if exc.server_error:
                table.add_row("Server error", exc.server_error)
        elif isinstance(exc, TransportError):
            table.add_row("Message", str(exc))
            if exc.status_code is not None:
                table.add_row("HTTP status", str(exc.status_code))
        else:
            table.add_row("Message", str(exc))
        self.console.print(Panel.fit(table, title=Text("Call failed", style="bold red")))

    def exit_code(self, exc: JsonClientError) -> int:
        if isinstance(exc, (JsonRpcError, ProtocolViolationError)):
            return 1
        return 2
