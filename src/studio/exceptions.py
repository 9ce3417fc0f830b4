"""Domain level exceptions for the studio core."""

from __future__ import annotations

__all__ = [
    "StudioError",
    "InvalidMediaError",
    "ExportError",
    "EmptyExportError",
    "ArchiveBuildError",
    "VideoFetchError",
    "PlaybackError",
    "PlaybackBusyError",
    "UpstreamQuotaError",
]


class StudioError(Exception):
    """Base class for application specific errors."""


class InvalidMediaError(StudioError, ValueError):
    """Raised when binary media or a data URI cannot be used."""


class ExportError(StudioError):
    """Base class for failures fatal to a whole export operation."""


class EmptyExportError(ExportError):
    """Raised when an export is requested for zero bundles."""


class ArchiveBuildError(ExportError):
    """Raised when the archive could not be serialized."""


class VideoFetchError(StudioError):
    """Raised when a remote video could not be downloaded."""

    def __init__(self, uri: str, reason: str) -> None:
        super().__init__(f"failed to fetch {uri}: {reason}")
        self.uri = uri
        self.reason = reason


class PlaybackError(StudioError):
    """Base class for preview playback errors."""


class PlaybackBusyError(PlaybackError):
    """Raised when tracks are attached or detached during playback."""


class UpstreamQuotaError(StudioError):
    """Raised when a generation collaborator reports rate limiting."""
