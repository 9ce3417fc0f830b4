from __future__ import annotations

import io
import wave

import pytest

from src.studio.bundles.bundle_models import (
    AssetBundle,
    VideoMetadata,
    VideoResource,
    VoiceoverResource,
)
from tests.helpers.bundles import make_bundle

pytestmark = pytest.mark.unit


def test_create_assigns_distinct_ids() -> None:
    first = make_bundle()
    second = make_bundle()

    assert first.id != second.id
    assert first != second
    assert first.timestamp.tzinfo is not None


def test_bundles_compare_by_id() -> None:
    bundle = make_bundle()
    clone = AssetBundle(id=bundle.id, metadata=VideoMetadata(title="Other"), video=bundle.video)

    assert bundle == clone
    assert len({bundle, clone}) == 1


def test_bundle_is_frozen() -> None:
    bundle = make_bundle()

    with pytest.raises(AttributeError):
        bundle.channel_label = "Les Archives du Mystère"  # type: ignore[misc]


def test_metadata_tags_are_frozen_in_order() -> None:
    tags = ["histoire", "mystère", "histoire"]
    metadata = VideoMetadata(title="Titre", tags=tags)  # type: ignore[arg-type]
    tags.append("late")

    assert metadata.tags == ("histoire", "mystère", "histoire")


def test_metadata_rejects_non_positive_episode() -> None:
    with pytest.raises(ValueError):
        VideoMetadata(title="Titre", episode_number=0)


def test_video_resource_requires_data_or_uri() -> None:
    with pytest.raises(ValueError):
        VideoResource()

    assert VideoResource(data=b"mp4").is_local
    assert not VideoResource(uri="https://cdn.example/video.mp4").is_local


def test_empty_strings_are_normalized_to_none() -> None:
    bundle = make_bundle(channel_label="", thumbnail_image="")

    assert bundle.channel_label is None
    assert bundle.thumbnail_image is None


def test_voiceover_from_pcm_wraps_wav() -> None:
    voiceover = VoiceoverResource.from_pcm(b"\x10\x00" * 100, playback_url="blob:studio/v")

    assert voiceover.playback_url == "blob:studio/v"
    with wave.open(io.BytesIO(voiceover.data or b""), "rb") as reader:
        assert reader.getframerate() == 24000


def test_playback_urls_lists_owned_urls() -> None:
    bundle = AssetBundle.create(
        VideoMetadata(title="Titre"),
        VideoResource(data=b"mp4", playback_url="blob:studio/video"),
        voiceover=VoiceoverResource(data=b"wav", playback_url="blob:studio/voice"),
    )

    assert list(bundle.playback_urls()) == ["blob:studio/video", "blob:studio/voice"]
    assert list(make_bundle().playback_urls()) == []
