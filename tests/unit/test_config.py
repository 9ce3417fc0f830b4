from __future__ import annotations

import pytest

from src.studio.config import AppConfig, load_config
from src.studio.session import build_session

pytestmark = pytest.mark.unit


def test_load_config_defaults(monkeypatch) -> None:
    for name in (
        "STUDIO_SLUG_MAX_LENGTH",
        "STUDIO_CHANNEL_PREFIX_LENGTH",
        "STUDIO_COMPRESSION_LEVEL",
        "STUDIO_MUSIC_PREVIEW_VOLUME",
        "STUDIO_FETCH_TIMEOUT_SECONDS",
        "STUDIO_VIDEO_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)

    assert load_config() == AppConfig.build_default()


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("STUDIO_SLUG_MAX_LENGTH", "20")
    monkeypatch.setenv("STUDIO_FETCH_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("STUDIO_MUSIC_PREVIEW_VOLUME", "0.5")

    config = load_config()

    assert config.export_limits.slug_max_length == 20
    assert config.fetch_timeout_seconds == 5.0
    assert config.music_preview_volume == 0.5


def test_load_config_rejects_volume_out_of_range(monkeypatch) -> None:
    monkeypatch.setenv("STUDIO_MUSIC_PREVIEW_VOLUME", "1.5")

    with pytest.raises(ValueError):
        load_config()


def test_video_api_key_reaches_fetcher(monkeypatch) -> None:
    monkeypatch.setenv("STUDIO_VIDEO_API_KEY", "veo-key")

    config = load_config()
    session = build_session(config)

    assert config.video_api_key == "veo-key"
    assert session.exports.builder.fetcher.api_key == "veo-key"


def test_blank_video_api_key_is_unset(monkeypatch) -> None:
    monkeypatch.setenv("STUDIO_VIDEO_API_KEY", "")

    assert load_config().video_api_key is None
