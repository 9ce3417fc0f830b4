"""Helpers for decoding inline media payloads."""

from __future__ import annotations

import base64
import binascii
import io
import wave

from ..exceptions import InvalidMediaError

SPEECH_SAMPLE_RATE = 24000
SPEECH_CHANNELS = 1
SPEECH_SAMPLE_WIDTH = 2  # 16-bit


def split_data_uri(value: str) -> tuple[str | None, str]:
    """Return ``(mime, base64_payload)`` for a data URI or bare base64 string."""
    if "," not in value:
        return None, value.strip()
    header, payload = value.split(",", 1)
    mime = None
    if header.startswith("data:"):
        mime = header[len("data:") :].split(";", 1)[0] or None
    return mime, payload.strip()


def decode_data_uri(value: str) -> bytes:
    """Strip the data-URI header (if present) and decode the base64 payload.

    Raises:
        InvalidMediaError: If the payload is empty or not valid base64.
    """
    _, payload = split_data_uri(value)
    if not payload:
        raise InvalidMediaError("data URI has no payload")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidMediaError("data URI payload is not valid base64") from exc


def pcm_to_wav(
    pcm: bytes,
    *,
    sample_rate: int = SPEECH_SAMPLE_RATE,
    channels: int = SPEECH_CHANNELS,
    sample_width: int = SPEECH_SAMPLE_WIDTH,
) -> bytes:
    """Wrap raw little-endian PCM samples in a RIFF/WAVE container."""
    if not pcm:
        raise InvalidMediaError("PCM payload is empty")
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as writer:
        writer.setnchannels(channels)
        writer.setsampwidth(sample_width)
        writer.setframerate(sample_rate)
        writer.writeframes(pcm)
    return buffer.getvalue()


__all__ = ["split_data_uri", "decode_data_uri", "pcm_to_wav"]
