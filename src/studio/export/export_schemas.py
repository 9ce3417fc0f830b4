"""Pydantic schemas for queue and export API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..bundles.bundle_models import AssetBundle, VideoMetadata


class MetadataPayload(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    script: str = ""
    subtitles: str | None = None
    thumbnail_idea: str = ""
    visual_prompt: str | None = None
    episode_number: int | None = Field(default=None, ge=1)
    community_post: str | None = None

    def to_metadata(self) -> VideoMetadata:
        return VideoMetadata(**self.model_dump())


class BundleSummary(BaseModel):
    id: str
    title: str
    channel_label: str | None = None
    selected: bool
    has_voiceover: bool
    has_thumbnail: bool
    video_source: str
    timestamp: datetime

    @classmethod
    def from_bundle(cls, bundle: AssetBundle, *, selected: bool) -> "BundleSummary":
        return cls(
            id=bundle.id,
            title=bundle.metadata.title,
            channel_label=bundle.channel_label,
            selected=selected,
            has_voiceover=bundle.voiceover is not None and bool(bundle.voiceover.data),
            has_thumbnail=bool(bundle.thumbnail_image),
            video_source="local" if bundle.video.is_local else "remote",
            timestamp=bundle.timestamp,
        )


class QueueResponse(BaseModel):
    items: list[BundleSummary]
    selected_count: int


class ToggleResponse(BaseModel):
    id: str
    selected: bool


class ProgressResponse(BaseModel):
    in_progress: bool
    label: str
    active_exports: int
