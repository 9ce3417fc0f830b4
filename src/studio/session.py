"""Per-process studio session: the owners of every in-memory resource."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from .branding.branding_service import BrandingService
from .channels.channel_models import ChannelDirectory
from .config import AppConfig
from .export.archive_builder import ArchiveBuilder, ExportContext
from .export.export_queue import ExportQueue
from .export.export_service import ExportService
from .export.video_fetcher import RemoteVideoFetcher
from .media.media_registry import MediaResourceRegistry
from .playback.playback_models import PlaybackSession
from .playback.synced_playback import StateListener, SyncedPlaybackController

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class StudioSession:
    config: AppConfig
    registry: MediaResourceRegistry
    branding: BrandingService
    queue: ExportQueue
    exports: ExportService
    channels: ChannelDirectory = field(default_factory=ChannelDirectory)
    selected_music_id: str | None = None

    def select_music(self, track_id: str | None) -> str | None:
        """Set the single background track used by preview and exports."""
        if track_id and track_id not in self.branding.assets.music_library:
            raise KeyError(track_id)
        self.selected_music_id = track_id or None
        return self.selected_music_id

    def export_context(self) -> ExportContext:
        """Snapshot of the global settings read by an export."""
        # a removed track must not linger as the selection
        if self.selected_music_id not in self.branding.assets.music_library:
            self.selected_music_id = None
        return ExportContext(
            branding=self.branding.assets,
            music_track_id=self.selected_music_id,
        )

    def preview_player(self, on_state_change: StateListener | None = None) -> SyncedPlaybackController:
        """Fresh controller mixing background music at the configured volume."""
        return SyncedPlaybackController(
            music_volume=self.config.music_preview_volume,
            on_state_change=on_state_change,
            session=PlaybackSession(music_track_id=self.selected_music_id),
        )

    def teardown(self) -> None:
        """Release every queued bundle and branding upload."""
        dropped = self.exports.teardown()
        self.branding.teardown()
        self.selected_music_id = None
        leaked = self.registry.release_all()
        logger.info("session.teardown", dropped_bundles=dropped, leaked_urls=leaked)


def build_session(config: AppConfig) -> StudioSession:
    registry = MediaResourceRegistry()
    queue = ExportQueue()
    builder = ArchiveBuilder(
        fetcher=RemoteVideoFetcher(
            timeout_seconds=config.fetch_timeout_seconds,
            api_key=config.video_api_key,
        ),
        slug_length=config.export_limits.slug_max_length,
        channel_prefix_length=config.export_limits.channel_prefix_length,
        compression_level=config.export_limits.compression_level,
    )
    return StudioSession(
        config=config,
        registry=registry,
        branding=BrandingService(registry=registry),
        queue=queue,
        exports=ExportService(queue=queue, builder=builder, registry=registry),
    )
