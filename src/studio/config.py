"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True)
class ExportLimits:
    slug_max_length: int
    channel_prefix_length: int
    compression_level: int


@dataclass(slots=True)
class AppConfig:
    export_limits: ExportLimits
    fetch_timeout_seconds: float
    music_preview_volume: float
    video_api_key: str | None = None

    @classmethod
    def build_default(cls) -> "AppConfig":
        return cls(
            export_limits=ExportLimits(
                slug_max_length=30,
                channel_prefix_length=15,
                compression_level=6,
            ),
            fetch_timeout_seconds=30.0,
            music_preview_volume=0.3,
        )


def load_config() -> AppConfig:
    """Load configuration from environment."""
    export_limits = ExportLimits(
        slug_max_length=int(os.getenv("STUDIO_SLUG_MAX_LENGTH", 30)),
        channel_prefix_length=int(os.getenv("STUDIO_CHANNEL_PREFIX_LENGTH", 15)),
        compression_level=int(os.getenv("STUDIO_COMPRESSION_LEVEL", 6)),
    )
    music_preview_volume = float(os.getenv("STUDIO_MUSIC_PREVIEW_VOLUME", 0.3))
    if not 0.0 <= music_preview_volume <= 1.0:
        raise ValueError("STUDIO_MUSIC_PREVIEW_VOLUME must be within [0, 1]")

    return AppConfig(
        export_limits=export_limits,
        fetch_timeout_seconds=float(os.getenv("STUDIO_FETCH_TIMEOUT_SECONDS", 30.0)),
        music_preview_volume=music_preview_volume,
        video_api_key=os.getenv("STUDIO_VIDEO_API_KEY") or None,
    )
