"""Assemble bundles and branding assets into one ZIP archive.

Layout rules:

* a single bundle is written flat at the archive root, several bundles get
  one folder each (``<channel prefix>_<title slug>``);
* filenames carry ordering prefixes so a directory listing reads in playback
  order: ``00_intro`` < ``01_main_video`` < ``02_voiceover`` <
  ``03_background_music`` < ``99_outro``;
* branding files (watermark, bumpers, selected music) are copied into every
  bundle folder so each folder is self-contained.

A remote video that cannot be downloaded is replaced by ``video_url.txt``
holding its URI; that is the only tolerated failure.  Everything else
propagates, and serialization errors surface as :class:`ArchiveBuildError`.
"""

from __future__ import annotations

import asyncio
import io
import logging
import zipfile
from dataclasses import dataclass, field
from typing import Sequence

from ..branding.branding_models import BrandingAssets
from ..bundles.bundle_models import AssetBundle
from ..exceptions import ArchiveBuildError, EmptyExportError, VideoFetchError
from ..media.media_helpers import decode_data_uri
from .export_naming import (
    DEFAULT_CHANNEL_PREFIX_LENGTH,
    DEFAULT_SLUG_LENGTH,
    unique_folder_names,
)
from .video_fetcher import RemoteVideoFetcher

METADATA_FILENAME = "metadata.txt"
SUBTITLES_FILENAME = "subtitles.srt"
INTRO_FILENAME = "00_intro.mp4"
MAIN_VIDEO_FILENAME = "01_main_video.mp4"
VOICEOVER_FILENAME = "02_voiceover.wav"
MUSIC_FILENAME = "03_background_music.mp3"
OUTRO_FILENAME = "99_outro.mp4"
THUMBNAIL_FILENAME = "thumbnail.png"
WATERMARK_FILENAME = "asset_watermark.png"
VIDEO_PLACEHOLDER_FILENAME = "video_url.txt"

# fixed entry timestamp keeps repeated builds byte-identical
_ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_NOT_AVAILABLE = "N/A"


@dataclass(slots=True)
class ExportContext:
    """Global state read at export time; never written back."""

    branding: BrandingAssets = field(default_factory=BrandingAssets)
    music_track_id: str | None = None


@dataclass(slots=True, frozen=True)
class ExportArchive:
    data: bytes = field(repr=False)
    entries: tuple[str, ...]
    bundle_count: int
    unfetched_uris: tuple[str, ...] = ()

    @property
    def size_bytes(self) -> int:
        return len(self.data)


def render_metadata(bundle: AssetBundle) -> str:
    """Plain-text metadata sheet in its fixed field order."""
    meta = bundle.metadata
    episode = str(meta.episode_number) if meta.episode_number is not None else _NOT_AVAILABLE
    lines = [
        f"CHANNEL: {bundle.channel_label or _NOT_AVAILABLE}",
        f"TITLE: {meta.title}",
        f"DESCRIPTION: {meta.description}",
        f"TAGS: {', '.join(meta.tags)}",
        f"VISUAL PROMPT: {meta.visual_prompt or _NOT_AVAILABLE}",
        f"EPISODE: {episode}",
        f"COMMUNITY POST: {meta.community_post or _NOT_AVAILABLE}",
        "",
        "SCRIPT:",
        meta.script,
    ]
    return "\n".join(lines) + "\n"


@dataclass(slots=True)
class _SharedFiles:
    """Branding payloads resolved once per build and copied into each folder."""

    watermark: bytes | None = None
    intro: bytes | None = None
    outro: bytes | None = None
    music: bytes | None = None


@dataclass(slots=True)
class _BundleFiles:
    files: list[tuple[str, bytes]] = field(default_factory=list)
    unfetched_uri: str | None = None


@dataclass(slots=True)
class ArchiveBuilder:
    fetcher: RemoteVideoFetcher = field(default_factory=RemoteVideoFetcher)
    slug_length: int = DEFAULT_SLUG_LENGTH
    channel_prefix_length: int = DEFAULT_CHANNEL_PREFIX_LENGTH
    compression_level: int = 6
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def build(
        self, bundles: Sequence[AssetBundle], context: ExportContext
    ) -> ExportArchive:
        """Collect every bundle's files, then serialize the archive off-loop."""
        if not bundles:
            raise EmptyExportError("no bundles selected for export")

        shared = self._shared_files(context)
        if len(bundles) == 1:
            folders = [""]
        else:
            folders = unique_folder_names(
                bundles,
                slug_length=self.slug_length,
                channel_prefix_length=self.channel_prefix_length,
            )

        collected = await asyncio.gather(
            *(self._bundle_files(bundle, shared) for bundle in bundles)
        )

        entries: list[tuple[str, bytes]] = []
        unfetched: list[str] = []
        for folder, bundle_files in zip(folders, collected):
            for name, payload in bundle_files.files:
                entries.append((f"{folder}/{name}" if folder else name, payload))
            if bundle_files.unfetched_uri:
                unfetched.append(bundle_files.unfetched_uri)

        self.log.info(
            "export.archive.serialize.start",
            extra={"bundle_count": len(bundles), "entry_count": len(entries)},
        )
        try:
            data = await asyncio.to_thread(self._serialize, entries)
        except (MemoryError, OSError, ValueError, zipfile.LargeZipFile) as exc:
            self.log.error(
                "export.archive.serialize.failed",
                extra={"bundle_count": len(bundles), "error": repr(exc)},
            )
            raise ArchiveBuildError(f"archive serialization failed: {exc!r}") from exc

        self.log.info(
            "export.archive.serialize.done",
            extra={"bundle_count": len(bundles), "size_bytes": len(data)},
        )
        return ExportArchive(
            data=data,
            entries=tuple(name for name, _ in entries),
            bundle_count=len(bundles),
            unfetched_uris=tuple(unfetched),
        )

    def _shared_files(self, context: ExportContext) -> _SharedFiles:
        branding = context.branding
        shared = _SharedFiles(watermark=branding.watermark.image_bytes())
        if branding.intro.is_active and branding.intro.file is not None:
            shared.intro = branding.intro.file.data
        if branding.outro.is_active and branding.outro.file is not None:
            shared.outro = branding.outro.file.data
        track = branding.music_library.get(context.music_track_id)
        if track is not None:
            shared.music = track.file.data
        elif context.music_track_id:
            self.log.warning(
                "export.archive.music_missing",
                extra={"music_track_id": context.music_track_id},
            )
        return shared

    async def _bundle_files(self, bundle: AssetBundle, shared: _SharedFiles) -> _BundleFiles:
        result = _BundleFiles()
        files = result.files
        files.append((METADATA_FILENAME, render_metadata(bundle).encode("utf-8")))
        if bundle.metadata.subtitles:
            files.append((SUBTITLES_FILENAME, bundle.metadata.subtitles.encode("utf-8")))

        video = bundle.video
        if video.data is not None:
            files.append((MAIN_VIDEO_FILENAME, video.data))
        else:
            uri = video.uri or ""
            try:
                files.append((MAIN_VIDEO_FILENAME, await self.fetcher.fetch(uri)))
            except VideoFetchError as exc:
                self.log.warning(
                    "export.archive.video_placeholder",
                    extra={"bundle_id": bundle.id, "uri": uri, "reason": exc.reason},
                )
                files.append((VIDEO_PLACEHOLDER_FILENAME, uri.encode("utf-8")))
                result.unfetched_uri = uri

        if bundle.voiceover is not None and bundle.voiceover.data:
            files.append((VOICEOVER_FILENAME, bundle.voiceover.data))
        if bundle.thumbnail_image:
            files.append((THUMBNAIL_FILENAME, decode_data_uri(bundle.thumbnail_image)))
        if shared.watermark is not None:
            files.append((WATERMARK_FILENAME, shared.watermark))
        if shared.intro is not None:
            files.append((INTRO_FILENAME, shared.intro))
        if shared.outro is not None:
            files.append((OUTRO_FILENAME, shared.outro))
        if shared.music is not None:
            files.append((MUSIC_FILENAME, shared.music))
        return result

    def _serialize(self, entries: Sequence[tuple[str, bytes]]) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, payload in entries:
                info = zipfile.ZipInfo(name, date_time=_ENTRY_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                archive.writestr(info, payload, compresslevel=self.compression_level)
        return buffer.getvalue()
