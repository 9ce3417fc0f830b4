"""Channel records and the dashboard estimates derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from ..bundles.bundle_models import AssetBundle

STUDIO_UPLOAD_URL = "https://studio.youtube.com/channel/{channel_id}/videos/upload?d=ud"


@dataclass(slots=True)
class Channel:
    id: str
    name: str
    theme: str = ""
    color: str = ""
    connected: bool = False
    youtube_handle: str | None = None
    rpm: float | None = None
    avg_views: int | None = None

    @property
    def publish_url(self) -> str:
        """Deep link to the upload page; publishing itself stays manual."""
        return STUDIO_UPLOAD_URL.format(channel_id=self.id)


@dataclass(slots=True, frozen=True)
class RevenueEstimate:
    total_views: int
    total_revenue: float
    counted_bundles: int


DEFAULT_CHANNELS: tuple[Channel, ...] = (
    Channel(
        id="odyssee",
        name="L’Odyssée des Premiers Hommes",
        theme="Préhistoire, évolution humaine, vie quotidienne des premiers hommes, archéologie.",
        color="text-amber-500",
        rpm=0.90,
        avg_views=15000,
    ),
    Channel(
        id="archives",
        name="Les Archives du Mystère",
        theme="Mystères historiques, énigmes, civilisations perdues, secrets non résolus.",
        color="text-purple-500",
        rpm=0.75,
        avg_views=25000,
    ),
    Channel(
        id="science",
        name="Et Si… La Science!",
        theme="Scénarios 'Et si', expériences de pensée, vulgarisation scientifique, futurisme.",
        color="text-cyan-500",
        rpm=1.50,
        avg_views=12000,
    ),
)


def default_channels() -> list[Channel]:
    return [replace(channel) for channel in DEFAULT_CHANNELS]


@dataclass(slots=True)
class ChannelDirectory:
    """In-memory channel list read by exports and the dashboard."""

    channels: list[Channel] = field(default_factory=default_channels)

    def get(self, channel_id: str) -> Channel | None:
        return next((channel for channel in self.channels if channel.id == channel_id), None)

    def toggle_connection(self, channel_id: str) -> Channel | None:
        """Simulated OAuth: flips the connected flag only."""
        channel = self.get(channel_id)
        if channel is not None:
            channel.connected = not channel.connected
        return channel

    def set_handle(self, channel_id: str, handle: str) -> Channel | None:
        channel = self.get(channel_id)
        if channel is not None:
            channel.youtube_handle = handle.strip() or None
        return channel


def estimate_revenue(bundles: Iterable[AssetBundle], channels: Sequence[Channel]) -> RevenueEstimate:
    """Sum average views and RPM-based revenue per bundle, joined on channel name.

    Bundles without a channel, or whose channel lacks RPM/average views, are
    skipped.
    """
    by_name = {channel.name: channel for channel in channels}
    views = 0
    revenue = 0.0
    counted = 0
    for bundle in bundles:
        channel = by_name.get(bundle.channel_label or "")
        if channel is None or not channel.avg_views or not channel.rpm:
            continue
        views += channel.avg_views
        revenue += (channel.avg_views / 1000) * channel.rpm
        counted += 1
    return RevenueEstimate(total_views=views, total_revenue=round(revenue, 2), counted_bundles=counted)
