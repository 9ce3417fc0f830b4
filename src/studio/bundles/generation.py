"""Generation request variants.

Each generation mode carries only the payload it needs instead of one
record with a pile of nullable fields.  Frames and reference images are
kept as data URIs, exactly as the generation collaborator receives them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, TypeAlias


class GenerationMode(StrEnum):
    TEXT_TO_VIDEO = "Text to Video"
    FRAMES_TO_VIDEO = "Frames to Video"
    REFERENCES_TO_VIDEO = "References to Video"
    EXTEND_VIDEO = "Extend Video"


class VeoModel(StrEnum):
    VEO_FAST = "veo-3.1-fast-generate-preview"
    VEO = "veo-3.1-generate-preview"


class AspectRatio(StrEnum):
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


class Resolution(StrEnum):
    P720 = "720p"
    P1080 = "1080p"


@dataclass(slots=True, frozen=True, kw_only=True)
class _BaseRequest:
    prompt: str
    model: VeoModel = VeoModel.VEO_FAST
    aspect_ratio: AspectRatio = AspectRatio.PORTRAIT
    resolution: Resolution = Resolution.P720

    def to_payload(self) -> dict[str, Any]:
        """Request body shared by every mode."""
        config: dict[str, Any] = {
            "numberOfVideos": 1,
            "resolution": self.resolution.value,
            "aspectRatio": self.aspect_ratio.value,
        }
        payload: dict[str, Any] = {"model": self.model.value, "config": config}
        if self.prompt:
            payload["prompt"] = self.prompt
        return payload


@dataclass(slots=True, frozen=True, kw_only=True)
class TextToVideo(_BaseRequest):
    mode: ClassVar[GenerationMode] = GenerationMode.TEXT_TO_VIDEO


@dataclass(slots=True, frozen=True, kw_only=True)
class FramesToVideo(_BaseRequest):
    mode: ClassVar[GenerationMode] = GenerationMode.FRAMES_TO_VIDEO

    start_frame: str
    end_frame: str | None = None
    is_looping: bool = False

    def __post_init__(self) -> None:
        if not self.start_frame:
            raise ValueError("frames-to-video requires a start frame")

    @property
    def effective_end_frame(self) -> str | None:
        # a loop ends on the frame it started from
        return self.start_frame if self.is_looping else self.end_frame

    def to_payload(self) -> dict[str, Any]:
        payload = _BaseRequest.to_payload(self)
        payload["image"] = self.start_frame
        if self.effective_end_frame:
            payload["config"]["lastFrame"] = self.effective_end_frame
        return payload


@dataclass(slots=True, frozen=True, kw_only=True)
class ReferencesToVideo(_BaseRequest):
    mode: ClassVar[GenerationMode] = GenerationMode.REFERENCES_TO_VIDEO

    reference_images: tuple[str, ...] = ()
    style_image: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "reference_images", tuple(self.reference_images))
        if not self.reference_images and not self.style_image:
            raise ValueError("references-to-video requires at least one image")

    def to_payload(self) -> dict[str, Any]:
        payload = _BaseRequest.to_payload(self)
        references = [
            {"image": image, "referenceType": "asset"} for image in self.reference_images
        ]
        if self.style_image:
            references.append({"image": self.style_image, "referenceType": "style"})
        payload["config"]["referenceImages"] = references
        return payload


@dataclass(slots=True, frozen=True, kw_only=True)
class ExtendVideo(_BaseRequest):
    mode: ClassVar[GenerationMode] = GenerationMode.EXTEND_VIDEO

    input_video_uri: str

    def __post_init__(self) -> None:
        if not self.input_video_uri:
            raise ValueError("an input video is required to extend a video")

    def to_payload(self) -> dict[str, Any]:
        payload = _BaseRequest.to_payload(self)
        # aspect ratio is inherited from the extended video
        payload["config"].pop("aspectRatio")
        payload["video"] = self.input_video_uri
        return payload


GenerationRequest: TypeAlias = TextToVideo | FramesToVideo | ReferencesToVideo | ExtendVideo
