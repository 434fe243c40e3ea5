from __future__ import annotations
import json
import threading
from typing import Any, Dict, Iterator, Optional
import httpx
from .config import Settings


CHUNK_SIZE = 64 * 1024


def iter_json_chunks(payload: Any, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Encode payload incrementally, yielding UTF-8 chunks of about chunk_size bytes."""
    buf = []
    size = 0
    for piece in json.JSONEncoder(ensure_ascii=False).iterencode(payload):
        data = piece.encode("utf-8")
        buf.append(data)
        size += len(data)
        if size >= chunk_size:
            yield b"".join(buf)
            buf = []
            size = 0
    if buf:
        yield b"".join(buf)


class HttpClient:
    """Synchronous HTTP client wrapper for JSON-RPC POSTs."""

    def __init__(self, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._transport = transport
        self._clients: Dict[bool, httpx.Client] = {}
        self._lock = threading.Lock()

    def _client(self, verify_tls: bool) -> httpx.Client:
        with self._lock:
            client = self._clients.get(verify_tls)
            if client is None:
                client = httpx.Client(
                    follow_redirects=False,
                    verify=verify_tls,
                    transport=self._transport,
                )
                self._clients[verify_tls] = client
            return client

    def post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        settings: Settings,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """POST payload as JSON. Buffered unless settings.streaming_mode is on."""
        all_headers = {"Content-Type": "application/json"}
        if settings.extra_headers:
            all_headers.update(dict(settings.extra_headers))
        if headers:
            all_headers.update(headers)
        if settings.streaming_mode:
            content: Any = iter_json_chunks(payload)
        else:
            content = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        client = self._client(not settings.trust_all_certificates)
        return client.post(
            url,
            content=content,
            headers=all_headers,
            timeout=httpx.Timeout(None, read=settings.effective_timeout),
        )

    def close(self) -> None:
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for c in clients:
            c.close()
