"""Data structures describing one produced item."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable

from ..media.media_helpers import SPEECH_SAMPLE_RATE, pcm_to_wav
from .generation import GenerationRequest


@dataclass(slots=True, frozen=True)
class VideoMetadata:
    """Publishing metadata produced by the plan step."""

    title: str
    description: str = ""
    tags: tuple[str, ...] = ()
    script: str = ""
    subtitles: str | None = None
    thumbnail_idea: str = ""
    visual_prompt: str | None = None
    episode_number: int | None = None
    community_post: str | None = None

    def __post_init__(self) -> None:
        # tags keep their order and duplicates; only the container is frozen
        object.__setattr__(self, "tags", tuple(self.tags))
        if self.episode_number is not None and self.episode_number < 1:
            raise ValueError("episode_number must be a positive integer")


@dataclass(slots=True, frozen=True)
class VideoResource:
    """Primary video: bytes already held, or a URI fetched at export time."""

    data: bytes | None = field(default=None, repr=False)
    uri: str | None = None
    playback_url: str | None = None

    def __post_init__(self) -> None:
        if self.data is None and not self.uri:
            raise ValueError("video resource needs either binary data or a URI")

    @property
    def is_local(self) -> bool:
        return self.data is not None


@dataclass(slots=True, frozen=True)
class VoiceoverResource:
    """Voice-over audio (WAV) and/or its playback URL."""

    data: bytes | None = field(default=None, repr=False)
    playback_url: str | None = None

    @classmethod
    def from_pcm(
        cls,
        pcm: bytes,
        *,
        sample_rate: int = SPEECH_SAMPLE_RATE,
        playback_url: str | None = None,
    ) -> "VoiceoverResource":
        return cls(data=pcm_to_wav(pcm, sample_rate=sample_rate), playback_url=playback_url)


@dataclass(slots=True, frozen=True, eq=False)
class AssetBundle:
    """Immutable snapshot of one generation session, compared by ``id``."""

    id: str
    metadata: VideoMetadata
    video: VideoResource
    thumbnail_image: str | None = None
    voiceover: VoiceoverResource | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    channel_label: str | None = None
    generation: GenerationRequest | None = None

    @classmethod
    def create(
        cls,
        metadata: VideoMetadata,
        video: VideoResource,
        *,
        thumbnail_image: str | None = None,
        voiceover: VoiceoverResource | None = None,
        channel_label: str | None = None,
        generation: GenerationRequest | None = None,
        timestamp: datetime | None = None,
    ) -> "AssetBundle":
        """Freeze a new bundle under a freshly generated id."""
        return cls(
            id=uuid.uuid4().hex,
            metadata=metadata,
            video=video,
            thumbnail_image=thumbnail_image or None,
            voiceover=voiceover,
            timestamp=timestamp or datetime.now(timezone.utc),
            channel_label=channel_label or None,
            generation=generation,
        )

    def playback_urls(self) -> Iterable[str]:
        """Playback URLs owned by this bundle."""
        if self.video.playback_url:
            yield self.video.playback_url
        if self.voiceover is not None and self.voiceover.playback_url:
            yield self.voiceover.playback_url

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssetBundle):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
