"""Download remote video payloads referenced by bundles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from ..exceptions import VideoFetchError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RemoteVideoFetcher:
    """Fetch video bytes over HTTP; every failure surfaces as :class:`VideoFetchError`."""

    timeout_seconds: float = 30.0
    api_key: str | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    async def fetch(self, uri: str) -> bytes:
        self.log.info("export.video.fetch.start", extra={"uri": uri})
        try:
            response = await self._get(uri)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self.log.warning(
                "export.video.fetch.http_error", extra={"uri": uri, "error": str(exc)}
            )
            raise VideoFetchError(uri, str(exc) or exc.__class__.__name__) from exc

        if response.status_code != 200:
            self.log.warning(
                "export.video.fetch.bad_status",
                extra={"uri": uri, "status_code": response.status_code},
            )
            raise VideoFetchError(uri, f"status={response.status_code}")

        payload = response.content
        if not payload:
            raise VideoFetchError(uri, "empty response body")
        self.log.info(
            "export.video.fetch.done", extra={"uri": uri, "size_bytes": len(payload)}
        )
        return payload

    async def _get(self, uri: str) -> httpx.Response:
        params = {"key": self.api_key} if self.api_key else None
        async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
            return await client.get(uri, params=params)
