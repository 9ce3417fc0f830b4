from __future__ import annotations

import asyncio
from datetime import date

import pytest

from src.studio.bundles.bundle_models import AssetBundle, VideoMetadata, VideoResource
from src.studio.exceptions import ArchiveBuildError, UpstreamQuotaError
from src.studio.export.archive_builder import ArchiveBuilder, ExportContext
from src.studio.export.export_queue import ExportQueue
from src.studio.export.export_service import (
    BATCH_FAILURE_MESSAGE,
    NOTHING_SELECTED_MESSAGE,
    SINGLE_FAILURE_MESSAGE,
    ExportProgress,
    ExportService,
)
from src.studio.media.media_models import MediaFile
from src.studio.media.media_registry import MediaResourceRegistry
from src.studio.status_messages import QUOTA_MESSAGE
from tests.helpers.bundles import make_bundle


class FailingBuilder:
    def __init__(self, error: Exception, progress: ExportProgress) -> None:
        self.error = error
        self.progress = progress
        self.labels: list[str] = []

    async def build(self, bundles, context):
        self.labels.append(self.progress.label)
        raise self.error


class GatedBuilder:
    """Holds multi-bundle builds until the gate opens."""

    def __init__(self) -> None:
        self.inner = ArchiveBuilder()
        self.started = asyncio.Event()
        self.gate = asyncio.Event()

    async def build(self, bundles, context):
        if len(bundles) > 1:
            self.started.set()
            await self.gate.wait()
        return await self.inner.build(bundles, context)


@pytest.fixture
def queue() -> ExportQueue:
    return ExportQueue()


@pytest.fixture
def service(queue: ExportQueue, registry: MediaResourceRegistry) -> ExportService:
    return ExportService(
        queue=queue,
        builder=ArchiveBuilder(),
        registry=registry,
        today=lambda: date(2024, 5, 17),
    )


@pytest.mark.asyncio
async def test_export_selected_names_batch_archive(service: ExportService, queue: ExportQueue) -> None:
    for title in ("A", "B"):
        queue.enqueue(make_bundle(title))

    outcome = await service.export_selected(ExportContext())

    assert outcome.ok
    assert outcome.filename == "veo_studio_batch_2024-05-17.zip"
    assert outcome.archive is not None and outcome.archive.bundle_count == 2
    assert service.progress.in_progress is False


@pytest.mark.asyncio
async def test_export_selected_with_empty_selection(service: ExportService, queue: ExportQueue) -> None:
    bundle = make_bundle()
    queue.enqueue(bundle)
    queue.toggle_selection(bundle.id)

    outcome = await service.export_selected(ExportContext())

    assert not outcome.ok
    assert outcome.error == NOTHING_SELECTED_MESSAGE
    assert outcome.failure_reason == "nothing_selected"


@pytest.mark.asyncio
async def test_export_bundle_uses_flat_single_package(service: ExportService) -> None:
    outcome = await service.export_bundle(make_bundle("Mon Film"), ExportContext())

    assert outcome.filename == "mon_film_package.zip"
    assert outcome.archive is not None
    assert "metadata.txt" in outcome.archive.entries


@pytest.mark.asyncio
async def test_build_failure_becomes_status_message(queue: ExportQueue, registry) -> None:
    progress = ExportProgress()
    builder = FailingBuilder(ArchiveBuildError("disk full"), progress)
    service = ExportService(queue=queue, builder=builder, registry=registry, progress=progress)
    queue.enqueue(make_bundle())

    outcome = await service.export_selected(ExportContext())

    assert outcome.failure_reason == "export_failed"
    assert outcome.error == f"{BATCH_FAILURE_MESSAGE}: disk full"
    assert builder.labels == ["Compressing 1 projects..."]
    assert progress.in_progress is False
    assert progress.label == ""


@pytest.mark.asyncio
async def test_long_failure_detail_is_truncated(queue: ExportQueue, registry) -> None:
    progress = ExportProgress()
    builder = FailingBuilder(RuntimeError("x" * 250), progress)
    service = ExportService(queue=queue, builder=builder, registry=registry, progress=progress)

    outcome = await service.export_bundle(make_bundle(), ExportContext())

    assert outcome.error == f"{SINGLE_FAILURE_MESSAGE}: {'x' * 100}..."
    assert builder.labels == ["Packaging asset..."]


@pytest.mark.asyncio
async def test_quota_failure_gets_retry_hint(queue: ExportQueue, registry) -> None:
    progress = ExportProgress()
    builder = FailingBuilder(UpstreamQuotaError("quota"), progress)
    service = ExportService(queue=queue, builder=builder, registry=registry, progress=progress)

    outcome = await service.export_bundle(make_bundle(), ExportContext())

    assert outcome.error == QUOTA_MESSAGE


def test_discard_revokes_bundle_urls(
    service: ExportService, queue: ExportQueue, registry: MediaResourceRegistry
) -> None:
    video = registry.register(MediaFile(name="v.mp4", data=b"mp4"))
    bundle = AssetBundle.create(
        VideoMetadata(title="Titre"), VideoResource(data=b"mp4", playback_url=video.url)
    )
    queue.enqueue(bundle)

    assert service.discard(bundle.id) is True
    assert service.discard(bundle.id) is False
    assert not registry.is_live(video.url)


def test_teardown_drops_queue(service: ExportService, queue: ExportQueue, registry) -> None:
    video = registry.register(MediaFile(name="v.mp4", data=b"mp4"))
    queue.enqueue(
        AssetBundle.create(
            VideoMetadata(title="Titre"), VideoResource(data=b"mp4", playback_url=video.url)
        )
    )
    queue.enqueue(make_bundle())

    assert service.teardown() == 2
    assert len(queue) == 0
    assert registry.live_urls() == frozenset()


@pytest.mark.asyncio
async def test_progress_survives_overlapping_exports(queue: ExportQueue, registry) -> None:
    progress = ExportProgress()
    builder = GatedBuilder()
    service = ExportService(queue=queue, builder=builder, registry=registry, progress=progress)
    queue.enqueue(make_bundle("A"))
    queue.enqueue(make_bundle("B"))

    batch = asyncio.create_task(service.export_selected(ExportContext()))
    await builder.started.wait()
    single = await service.export_bundle(make_bundle("Solo"), ExportContext())

    assert single.ok
    assert progress.in_progress is True
    assert progress.label == "Compressing 2 projects..."
    assert progress.active_count == 1

    builder.gate.set()
    outcome = await batch

    assert outcome.ok
    assert progress.in_progress is False
    assert progress.label == ""


def test_progress_label_follows_latest_live_operation() -> None:
    progress = ExportProgress()

    with progress.track("Compressing 3 projects..."):
        with progress.track("Packaging asset..."):
            assert progress.label == "Packaging asset..."
            assert progress.active_count == 2
        assert progress.label == "Compressing 3 projects..."

    assert not progress.in_progress
