"""Media data models."""

from dataclasses import dataclass, field
from pathlib import PurePosixPath


@dataclass(slots=True, frozen=True)
class MediaFile:
    """Uploaded binary file held in memory."""

    name: str
    data: bytes = field(repr=False)
    content_type: str = "application/octet-stream"

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.name).suffix.lower()


@dataclass(slots=True, eq=False)
class MediaHandle:
    """Revocable playback URL bound to the file it was created for."""

    url: str
    file: MediaFile
    released: bool = False
