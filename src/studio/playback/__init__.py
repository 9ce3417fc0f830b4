"""Synchronized multi-track preview player."""

from .playback_models import MediaTrack, PlaybackSession, PlaybackState, TrackRole
from .synced_playback import MUSIC_PREVIEW_VOLUME, SyncedPlaybackController

__all__ = [
    "MUSIC_PREVIEW_VOLUME",
    "MediaTrack",
    "PlaybackSession",
    "PlaybackState",
    "SyncedPlaybackController",
    "TrackRole",
]
