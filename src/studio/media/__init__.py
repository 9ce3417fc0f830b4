"""Binary media handling: playback URL registry and decoding helpers."""

from .media_models import MediaFile, MediaHandle
from .media_registry import MediaResourceRegistry

__all__ = ["MediaFile", "MediaHandle", "MediaResourceRegistry"]
