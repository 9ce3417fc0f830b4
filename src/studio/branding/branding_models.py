"""Global branding assets shared by every export."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterator

from ..media.media_helpers import decode_data_uri
from ..media.media_models import MediaFile, MediaHandle

OPACITY_RANGE = (0.1, 1.0)
SCALE_RANGE = (0.1, 0.5)


class WatermarkPosition(StrEnum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


@dataclass(slots=True)
class WatermarkSettings:
    enabled: bool = False
    data_url: str | None = None
    position: WatermarkPosition = WatermarkPosition.BOTTOM_RIGHT
    opacity: float = 0.8
    scale: float = 0.15

    def __post_init__(self) -> None:
        self.position = WatermarkPosition(self.position)
        _check_range("opacity", self.opacity, OPACITY_RANGE)
        _check_range("scale", self.scale, SCALE_RANGE)

    @property
    def is_active(self) -> bool:
        return self.enabled and bool(self.data_url)

    def image_bytes(self) -> bytes | None:
        """Decoded watermark image, or ``None`` when the watermark is off."""
        if not self.is_active:
            return None
        return decode_data_uri(self.data_url or "")


@dataclass(slots=True)
class IntroOutroAsset:
    enabled: bool = False
    handle: MediaHandle | None = None

    @property
    def file(self) -> MediaFile | None:
        return self.handle.file if self.handle else None

    @property
    def preview_url(self) -> str | None:
        return self.handle.url if self.handle else None

    @property
    def is_active(self) -> bool:
        return self.enabled and self.handle is not None


@dataclass(slots=True)
class MusicTrack:
    id: str
    name: str
    handle: MediaHandle

    @property
    def file(self) -> MediaFile:
        return self.handle.file

    @property
    def url(self) -> str:
        return self.handle.url


@dataclass(slots=True)
class MusicLibrary:
    """Ordered set of uploaded background tracks keyed by id."""

    _tracks: dict[str, MusicTrack] = field(default_factory=dict)

    def add(self, track: MusicTrack) -> None:
        self._tracks[track.id] = track

    def pop(self, track_id: str) -> MusicTrack | None:
        return self._tracks.pop(track_id, None)

    def get(self, track_id: str | None) -> MusicTrack | None:
        if not track_id:
            return None
        return self._tracks.get(track_id)

    def __iter__(self) -> Iterator[MusicTrack]:
        return iter(list(self._tracks.values()))

    def __len__(self) -> int:
        return len(self._tracks)

    def __contains__(self, track_id: object) -> bool:
        return track_id in self._tracks


@dataclass(slots=True)
class BrandingAssets:
    watermark: WatermarkSettings = field(default_factory=WatermarkSettings)
    intro: IntroOutroAsset = field(default_factory=IntroOutroAsset)
    outro: IntroOutroAsset = field(default_factory=IntroOutroAsset)
    music_library: MusicLibrary = field(default_factory=MusicLibrary)

    def handles(self) -> Iterator[MediaHandle]:
        """Every playback handle currently referenced by the branding."""
        for asset in (self.intro, self.outro):
            if asset.handle is not None:
                yield asset.handle
        for track in self.music_library:
            yield track.handle


def _check_range(name: str, value: float, bounds: tuple[float, float]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"watermark {name} must be within [{low}, {high}], got {value}")
