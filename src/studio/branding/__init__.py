"""Branding assets: watermark, intro/outro bumpers and the music library."""

from .branding_models import (
    BrandingAssets,
    IntroOutroAsset,
    MusicLibrary,
    MusicTrack,
    WatermarkPosition,
    WatermarkSettings,
)
from .branding_service import BrandingService, Bumper

__all__ = [
    "BrandingAssets",
    "BrandingService",
    "Bumper",
    "IntroOutroAsset",
    "MusicLibrary",
    "MusicTrack",
    "WatermarkPosition",
    "WatermarkSettings",
]
