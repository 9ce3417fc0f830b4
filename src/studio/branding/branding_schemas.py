"""Pydantic schemas for branding API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .branding_models import (
    OPACITY_RANGE,
    SCALE_RANGE,
    BrandingAssets,
    IntroOutroAsset,
    WatermarkPosition,
)


class WatermarkModel(BaseModel):
    enabled: bool
    has_image: bool
    position: WatermarkPosition
    opacity: float
    scale: float


class WatermarkUpdateRequest(BaseModel):
    enabled: bool | None = None
    data_url: str | None = None
    position: WatermarkPosition | None = None
    opacity: float | None = Field(default=None, ge=OPACITY_RANGE[0], le=OPACITY_RANGE[1])
    scale: float | None = Field(default=None, ge=SCALE_RANGE[0], le=SCALE_RANGE[1])


class BumperModel(BaseModel):
    enabled: bool
    file_name: str | None = None
    preview_url: str | None = None

    @classmethod
    def from_asset(cls, asset: IntroOutroAsset) -> "BumperModel":
        return cls(
            enabled=asset.enabled,
            file_name=asset.file.name if asset.file else None,
            preview_url=asset.preview_url,
        )


class MusicTrackModel(BaseModel):
    id: str
    name: str
    url: str


class MusicSelectionRequest(BaseModel):
    track_id: str | None = None


class BrandingResponseModel(BaseModel):
    watermark: WatermarkModel
    intro: BumperModel
    outro: BumperModel
    music: list[MusicTrackModel] = Field(default_factory=list)
    selected_music_id: str | None = None

    @classmethod
    def from_assets(
        cls, assets: BrandingAssets, *, selected_music_id: str | None
    ) -> "BrandingResponseModel":
        watermark = assets.watermark
        return cls(
            watermark=WatermarkModel(
                enabled=watermark.enabled,
                has_image=bool(watermark.data_url),
                position=watermark.position,
                opacity=watermark.opacity,
                scale=watermark.scale,
            ),
            intro=BumperModel.from_asset(assets.intro),
            outro=BumperModel.from_asset(assets.outro),
            music=[
                MusicTrackModel(id=track.id, name=track.name, url=track.url)
                for track in assets.music_library
            ],
            selected_music_id=selected_music_id,
        )
