"""Export operations exposed to the console: batch and single downloads."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterator

from ..bundles.bundle_models import AssetBundle
from ..exceptions import EmptyExportError
from ..media.media_registry import MediaResourceRegistry
from ..status_messages import describe_failure
from .archive_builder import ArchiveBuilder, ExportArchive, ExportContext
from .export_naming import batch_archive_filename, single_archive_filename
from .export_queue import ExportQueue

BATCH_FAILURE_MESSAGE = "Failed to create the ZIP archive"
SINGLE_FAILURE_MESSAGE = "Failed to create the download package"
NOTHING_SELECTED_MESSAGE = "No project selected for export"


@dataclass(slots=True)
class ExportProgress:
    """Caller-visible state of the exports currently running.

    Each tracked operation holds its own entry, so one export finishing does
    not hide another still in flight.  ``label`` is the most recently started
    live operation.
    """

    _active: dict[int, str] = field(default_factory=dict)
    _next_token: int = 0

    @property
    def in_progress(self) -> bool:
        return bool(self._active)

    @property
    def label(self) -> str:
        return next(reversed(self._active.values()), "")

    @property
    def active_count(self) -> int:
        return len(self._active)

    @contextmanager
    def track(self, label: str) -> Iterator[None]:
        token = self._next_token
        self._next_token += 1
        self._active[token] = label
        try:
            yield
        finally:
            del self._active[token]


@dataclass(slots=True, frozen=True)
class ExportOutcome:
    """Either a complete archive with its download name, or an error message."""

    archive: ExportArchive | None = None
    filename: str | None = None
    error: str | None = None
    failure_reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.archive is not None


@dataclass(slots=True)
class ExportService:
    queue: ExportQueue
    builder: ArchiveBuilder
    registry: MediaResourceRegistry
    progress: ExportProgress = field(default_factory=ExportProgress)
    today: Callable[[], date] = date.today
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def export_selected(self, context: ExportContext) -> ExportOutcome:
        """Build one archive from the selected queue entries."""
        bundles = self.queue.selected_bundles()
        if not bundles:
            return ExportOutcome(error=NOTHING_SELECTED_MESSAGE, failure_reason="nothing_selected")
        return await self._export(
            bundles,
            context,
            label=f"Compressing {len(bundles)} projects...",
            filename=batch_archive_filename(self.today()),
            failure_message=BATCH_FAILURE_MESSAGE,
        )

    async def export_bundle(self, bundle: AssetBundle, context: ExportContext) -> ExportOutcome:
        """Package a single bundle (flat layout), queued or not."""
        return await self._export(
            [bundle],
            context,
            label="Packaging asset...",
            filename=single_archive_filename(bundle.metadata.title),
            failure_message=SINGLE_FAILURE_MESSAGE,
        )

    def discard(self, bundle_id: str) -> bool:
        """Remove a queued bundle and revoke the playback URLs it owns."""
        bundle = self.queue.remove(bundle_id)
        if bundle is None:
            return False
        self._release_bundle(bundle)
        return True

    def teardown(self) -> int:
        """Drop the whole queue at session end."""
        dropped = self.queue.clear()
        for bundle in dropped:
            self._release_bundle(bundle)
        return len(dropped)

    async def _export(
        self,
        bundles: list[AssetBundle],
        context: ExportContext,
        *,
        label: str,
        filename: str,
        failure_message: str,
    ) -> ExportOutcome:
        self.log.info(
            "export.start", extra={"bundle_count": len(bundles), "archive_filename": filename}
        )
        try:
            with self.progress.track(label):
                archive = await self.builder.build(bundles, context)
        except EmptyExportError:
            return ExportOutcome(error=NOTHING_SELECTED_MESSAGE, failure_reason="nothing_selected")
        except Exception as exc:
            self.log.exception("export.failed", extra={"bundle_count": len(bundles)})
            return ExportOutcome(
                error=describe_failure(exc, failure_message), failure_reason="export_failed"
            )

        self.log.info(
            "export.done",
            extra={
                "bundle_count": archive.bundle_count,
                "size_bytes": archive.size_bytes,
                "unfetched": len(archive.unfetched_uris),
            },
        )
        return ExportOutcome(archive=archive, filename=filename)

    def _release_bundle(self, bundle: AssetBundle) -> None:
        for url in bundle.playback_urls():
            self.registry.release_url(url)
