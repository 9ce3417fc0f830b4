"""Types shared by the synced preview player."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol, runtime_checkable


class PlaybackState(StrEnum):
    STOPPED = "stopped"
    PLAYING = "playing"


class TrackRole(StrEnum):
    """Track roles in play order."""

    VIDEO = "video"
    VOICEOVER = "voiceover"
    MUSIC = "music"


PLAY_ORDER = (TrackRole.VIDEO, TrackRole.VOICEOVER, TrackRole.MUSIC)


@runtime_checkable
class MediaTrack(Protocol):
    """Minimal transport surface of a media element."""

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, position_seconds: float) -> None: ...

    def set_volume(self, volume: float) -> None: ...


@dataclass(slots=True)
class PlaybackSession:
    """Tracks attached for one preview interaction."""

    tracks: dict[TrackRole, MediaTrack] = field(default_factory=dict)
    bundle_id: str | None = None
    music_track_id: str | None = None

    def attached(self) -> list[tuple[TrackRole, MediaTrack]]:
        return [(role, self.tracks[role]) for role in PLAY_ORDER if role in self.tracks]

    @property
    def has_video(self) -> bool:
        return TrackRole.VIDEO in self.tracks
