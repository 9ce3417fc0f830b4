from __future__ import annotations

import pytest

from src.studio.bundles.generation import (
    AspectRatio,
    ExtendVideo,
    FramesToVideo,
    GenerationMode,
    ReferencesToVideo,
    Resolution,
    TextToVideo,
    VeoModel,
)

pytestmark = pytest.mark.unit


def test_text_to_video_payload() -> None:
    request = TextToVideo(prompt="A comet over Lascaux", resolution=Resolution.P1080)

    assert request.mode is GenerationMode.TEXT_TO_VIDEO
    assert request.to_payload() == {
        "model": VeoModel.VEO_FAST.value,
        "prompt": "A comet over Lascaux",
        "config": {"numberOfVideos": 1, "resolution": "1080p", "aspectRatio": "9:16"},
    }


def test_looping_frames_end_on_start_frame() -> None:
    request = FramesToVideo(prompt="", start_frame="data:a", end_frame="data:b", is_looping=True)

    payload = request.to_payload()

    assert "prompt" not in payload
    assert payload["image"] == "data:a"
    assert payload["config"]["lastFrame"] == "data:a"


def test_frames_without_end_frame() -> None:
    payload = FramesToVideo(prompt="walk", start_frame="data:a").to_payload()

    assert "lastFrame" not in payload["config"]


def test_frames_require_start_frame() -> None:
    with pytest.raises(ValueError):
        FramesToVideo(prompt="walk", start_frame="")


def test_references_include_style_image() -> None:
    request = ReferencesToVideo(
        prompt="museum",
        reference_images=["data:r1", "data:r2"],  # type: ignore[arg-type]
        style_image="data:s",
        aspect_ratio=AspectRatio.LANDSCAPE,
        model=VeoModel.VEO,
    )

    payload = request.to_payload()

    assert request.reference_images == ("data:r1", "data:r2")
    assert payload["model"] == "veo-3.1-generate-preview"
    assert payload["config"]["referenceImages"] == [
        {"image": "data:r1", "referenceType": "asset"},
        {"image": "data:r2", "referenceType": "asset"},
        {"image": "data:s", "referenceType": "style"},
    ]


def test_references_require_an_image() -> None:
    with pytest.raises(ValueError):
        ReferencesToVideo(prompt="museum")


def test_extend_video_drops_aspect_ratio() -> None:
    payload = ExtendVideo(prompt="continue", input_video_uri="https://cdn.example/v.mp4").to_payload()

    assert payload["video"] == "https://cdn.example/v.mp4"
    assert "aspectRatio" not in payload["config"]


def test_extend_video_requires_input() -> None:
    with pytest.raises(ValueError):
        ExtendVideo(prompt="continue", input_video_uri="")
