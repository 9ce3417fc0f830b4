"""httpx.AsyncClient stand-in serving canned responses per URL."""

from __future__ import annotations

from typing import Any

import httpx


class DummyResponse:
    def __init__(self, status_code: int, content: bytes = b"") -> None:
        self.status_code = status_code
        self.content = content


class DummyAsyncClient:
    def __init__(self, routes: dict[str, DummyResponse | Exception]) -> None:
        self._routes = routes
        self.requests: list[dict[str, Any]] = []

    async def __aenter__(self) -> "DummyAsyncClient":  # pragma: no cover - helper
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:  # pragma: no cover - helper
        return None

    async def get(self, url: str, params: dict[str, str] | None = None) -> DummyResponse:
        self.requests.append({"url": url, "params": params})
        outcome = self._routes.get(url)
        if outcome is None:
            raise httpx.ConnectError(f"no route for {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
