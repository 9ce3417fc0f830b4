"""Produced items ready for export."""

from .bundle_models import (
    AssetBundle,
    VideoMetadata,
    VideoResource,
    VoiceoverResource,
)
from .generation import (
    AspectRatio,
    ExtendVideo,
    FramesToVideo,
    GenerationMode,
    GenerationRequest,
    ReferencesToVideo,
    Resolution,
    TextToVideo,
    VeoModel,
)

__all__ = [
    "AssetBundle",
    "VideoMetadata",
    "VideoResource",
    "VoiceoverResource",
    "AspectRatio",
    "ExtendVideo",
    "FramesToVideo",
    "GenerationMode",
    "GenerationRequest",
    "ReferencesToVideo",
    "Resolution",
    "TextToVideo",
    "VeoModel",
]
