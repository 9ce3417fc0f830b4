"""Registry of revocable playback URLs for in-memory media files."""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from ..exceptions import InvalidMediaError
from .media_models import MediaFile, MediaHandle

URL_PREFIX = "blob:studio/"


@dataclass(slots=True)
class MediaResourceRegistry:
    """Single choke point for creating and revoking playback URLs.

    Every remove/replace/teardown path of the owners (branding settings,
    export queue) must go through :meth:`release` so that the set of live
    URLs always equals the set of handles still referenced somewhere.
    """

    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    _live: dict[str, MediaHandle] = field(default_factory=dict)

    def register(self, file: MediaFile) -> MediaHandle:
        """Create a playback URL for ``file``."""
        if not file.data:
            raise InvalidMediaError(f"media file '{file.name}' is empty")
        url = f"{URL_PREFIX}{uuid.uuid4()}"
        handle = MediaHandle(url=url, file=file)
        self._live[url] = handle
        self.log.debug(
            "media.url.registered",
            extra={"url": url, "media_name": file.name, "size_bytes": file.size_bytes},
        )
        return handle

    def release(self, handle: MediaHandle) -> bool:
        """Revoke the URL of ``handle``; return ``False`` if already revoked."""
        if handle.released:
            return False
        handle.released = True
        if self._live.get(handle.url) is not handle:
            return False
        del self._live[handle.url]
        self.log.debug("media.url.revoked", extra={"url": handle.url})
        return True

    def release_url(self, url: str) -> bool:
        """Revoke a URL when only the URL itself is known."""
        handle = self._live.get(url)
        if handle is None:
            return False
        return self.release(handle)

    def replace(self, handle: MediaHandle | None, new_file: MediaFile) -> MediaHandle:
        """Register ``new_file``, then release ``handle`` (if any)."""
        fresh = self.register(new_file)
        if handle is not None:
            self.release(handle)
        return fresh

    def resolve(self, url: str) -> MediaFile | None:
        handle = self._live.get(url)
        return handle.file if handle else None

    def is_live(self, url: str) -> bool:
        return url in self._live

    def live_urls(self) -> frozenset[str]:
        return frozenset(self._live)

    def release_all(self) -> int:
        """Revoke every live URL (session teardown)."""
        released = 0
        for handle in list(self._live.values()):
            if self.release(handle):
                released += 1
        if released:
            self.log.info("media.registry.cleared", extra={"released": released})
        return released

    @contextmanager
    def acquire(self, file: MediaFile) -> Iterator[MediaHandle]:
        """Register ``file`` for the duration of the ``with`` block."""
        handle = self.register(file)
        try:
            yield handle
        finally:
            self.release(handle)
