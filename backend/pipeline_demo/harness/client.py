"""
Pipeline Demo — Harness HTTP Client
====================================

What:  Issues one HTTP request at a time against the running service.
How:   Thin wrapper over httpx.AsyncClient. Every response is read fully,
       decoded as JSON when possible and returned as raw text otherwise.

Error behavior:
    HTTP error statuses are NOT errors here: a 404 is a perfectly good
    response for the harness to assert on. Only transport failures
    (connection refused, reset, timeout) raise, as httpx.TransportError.
"""

import json
from typing import Any, Optional

import httpx
from pydantic import BaseModel


class HarnessResponse(BaseModel):
    """Status code plus decoded body (dict/list for JSON, str otherwise)."""
    status: int
    body: Any = None

    def get(self, key: str, default: Any = None) -> Any:
        """Field of a JSON object body; `default` for any other body shape."""
        if isinstance(self.body, dict):
            return self.body.get(key, default)
        return default


class HarnessClient:
    """
    Async HTTP client bound to one service base URL.

    Usage:
        async with HarnessClient("http://127.0.0.1:3001") as client:
            response = await client.make_request("/api/users", "POST", {"name": "A"})

    Args:
        base_url: Scheme, host and port of the service under test
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests pass an ASGITransport)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def make_request(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Any] = None,
    ) -> HarnessResponse:
        """
        Send one request and return its status and decoded body.

        Raises:
            httpx.TransportError: the request never got an HTTP response
        """
        content = json.dumps(body) if body is not None else None
        response = await self._client.request(method, path, content=content)

        try:
            decoded = response.json()
        except ValueError:
            decoded = response.text

        return HarnessResponse(status=response.status_code, body=decoded)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HarnessClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
