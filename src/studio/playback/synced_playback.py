"""Drive video, voice-over and background music as one transport."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from ..exceptions import PlaybackBusyError
from .playback_models import MediaTrack, PlaybackSession, PlaybackState, TrackRole

MUSIC_PREVIEW_VOLUME = 0.3

StateListener = Callable[[PlaybackState], None]


@dataclass(slots=True)
class SyncedPlaybackController:
    """Two-state (STOPPED/PLAYING) controller over up to three tracks.

    ``play`` calls are issued back to back in video, voice-over, music order,
    so the tracks stay in sync on a best-effort basis only.  Tracks may only
    be attached or detached while stopped.
    """

    music_volume: float = MUSIC_PREVIEW_VOLUME
    on_state_change: StateListener | None = None
    session: PlaybackSession = field(default_factory=PlaybackSession)
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    _state: PlaybackState = PlaybackState.STOPPED

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    def load(self, session: PlaybackSession) -> None:
        """Swap in the tracks of another preview interaction."""
        self._ensure_stopped("load a session")
        self.session = session

    def attach(self, role: TrackRole, track: MediaTrack) -> None:
        self._ensure_stopped(f"attach {role.value}")
        self.session.tracks[role] = track

    def detach(self, role: TrackRole) -> MediaTrack | None:
        self._ensure_stopped(f"detach {role.value}")
        return self.session.tracks.pop(role, None)

    def toggle(self) -> PlaybackState:
        """User toggle: start from zero when stopped, pause when playing."""
        if self.playing:
            self._stop()
        else:
            self._start()
        return self._state

    def on_video_ended(self) -> None:
        """Natural end of the primary video returns the transport to STOPPED."""
        if not self.playing:
            return
        self._stop()

    def _start(self) -> None:
        if not self.session.has_video:
            self.log.debug("playback.start_ignored", extra={"reason": "no_video"})
            return
        attached = self.session.attached()
        for _, track in attached:
            track.seek(0.0)
        started: list[MediaTrack] = []
        try:
            for role, track in attached:
                if role is TrackRole.MUSIC:
                    track.set_volume(self.music_volume)
                track.play()
                started.append(track)
        except Exception:
            # a rejected play() leaves every track paused and the state STOPPED
            for track in started:
                track.pause()
            self.log.warning(
                "playback.start_failed",
                extra={"bundle_id": self.session.bundle_id, "started": len(started)},
            )
            raise
        self._set_state(PlaybackState.PLAYING)

    def _stop(self) -> None:
        for _, track in self.session.attached():
            track.pause()
        self._set_state(PlaybackState.STOPPED)

    def _set_state(self, state: PlaybackState) -> None:
        if state is self._state:
            return
        self._state = state
        self.log.info(
            "playback.state_changed",
            extra={"state": state.value, "bundle_id": self.session.bundle_id},
        )
        if self.on_state_change is not None:
            self.on_state_change(state)

    def _ensure_stopped(self, action: str) -> None:
        if self.playing:
            raise PlaybackBusyError(f"cannot {action} while playing")
