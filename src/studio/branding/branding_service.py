"""Manage branding uploads and their playback URLs."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from enum import StrEnum
from pathlib import PurePosixPath
from typing import Any

from ..media.media_models import MediaFile
from ..media.media_registry import MediaResourceRegistry
from .branding_models import BrandingAssets, IntroOutroAsset, MusicTrack, WatermarkSettings


class Bumper(StrEnum):
    INTRO = "intro"
    OUTRO = "outro"


@dataclass(slots=True)
class BrandingService:
    """Owner of :class:`BrandingAssets`; routes every URL release via the registry."""

    registry: MediaResourceRegistry
    assets: BrandingAssets = field(default_factory=BrandingAssets)
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def update_watermark(self, changes: dict[str, Any]) -> WatermarkSettings:
        """Apply partial watermark changes; invalid values leave settings untouched."""
        updated = replace(self.assets.watermark, **changes)
        self.assets.watermark = updated
        self.log.info(
            "branding.watermark.updated",
            extra={"enabled": updated.enabled, "position": updated.position.value},
        )
        return updated

    def clear_watermark_image(self) -> WatermarkSettings:
        """Drop the uploaded logo; placement settings are kept."""
        updated = replace(self.assets.watermark, data_url=None)
        self.assets.watermark = updated
        self.log.info("branding.watermark.image_cleared")
        return updated

    def set_bumper(self, kind: Bumper, file: MediaFile) -> IntroOutroAsset:
        """Attach (or swap) the intro/outro video and enable it."""
        asset = self._bumper(kind)
        asset.handle = self.registry.replace(asset.handle, file)
        asset.enabled = True
        self.log.info(
            "branding.bumper.attached",
            extra={"kind": kind.value, "media_name": file.name, "size_bytes": file.size_bytes},
        )
        return asset

    def clear_bumper(self, kind: Bumper) -> None:
        asset = self._bumper(kind)
        if asset.handle is not None:
            self.registry.release(asset.handle)
        asset.handle = None
        asset.enabled = False
        self.log.info("branding.bumper.cleared", extra={"kind": kind.value})

    def add_music(self, file: MediaFile, *, name: str | None = None) -> MusicTrack:
        handle = self.registry.register(file)
        track = MusicTrack(
            id=uuid.uuid4().hex,
            name=name or PurePosixPath(file.name).stem or "track",
            handle=handle,
        )
        self.assets.music_library.add(track)
        self.log.info("branding.music.added", extra={"track_id": track.id, "track_name": track.name})
        return track

    def remove_music(self, track_id: str) -> bool:
        """Remove a track and revoke its URL; unknown ids are ignored."""
        track = self.assets.music_library.pop(track_id)
        if track is None:
            return False
        self.registry.release(track.handle)
        self.log.info("branding.music.removed", extra={"track_id": track_id})
        return True

    def teardown(self) -> None:
        """Release every branding handle (binary files do not survive reload)."""
        for kind in Bumper:
            self.clear_bumper(kind)
        for track in self.assets.music_library:
            self.remove_music(track.id)

    def _bumper(self, kind: Bumper) -> IntroOutroAsset:
        return self.assets.intro if kind is Bumper.INTRO else self.assets.outro
