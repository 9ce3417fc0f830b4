"""Factories for bundles and inline media used across tests."""

from __future__ import annotations

import base64

from src.studio.bundles.bundle_models import AssetBundle, VideoMetadata, VideoResource

TRANSPARENT_PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMB/kwL7ZkAAAAASUVORK5CYII="
TRANSPARENT_PNG_BYTES = base64.b64decode(TRANSPARENT_PNG_BASE64)
PNG_DATA_URI = f"data:image/png;base64,{TRANSPARENT_PNG_BASE64}"


def make_bundle(
    title: str = "Voyage Stellaire",
    *,
    channel_label: str | None = None,
    video: bytes | None = b"video-bytes",
    video_uri: str | None = None,
    thumbnail_image: str | None = None,
    **metadata_fields,
) -> AssetBundle:
    metadata = VideoMetadata(title=title, **metadata_fields)
    return AssetBundle.create(
        metadata,
        VideoResource(data=video, uri=video_uri),
        thumbnail_image=thumbnail_image,
        channel_label=channel_label,
    )
