"""Export pipeline: queue, archive assembly and download naming."""

from .archive_builder import ArchiveBuilder, ExportArchive, ExportContext, render_metadata
from .export_queue import ExportQueue
from .export_service import ExportOutcome, ExportProgress, ExportService
from .video_fetcher import RemoteVideoFetcher

__all__ = [
    "ArchiveBuilder",
    "ExportArchive",
    "ExportContext",
    "ExportOutcome",
    "ExportProgress",
    "ExportQueue",
    "ExportService",
    "RemoteVideoFetcher",
    "render_metadata",
]
