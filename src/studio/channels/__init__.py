"""Channel records, publish links and revenue estimates."""

from .channel_models import (
    DEFAULT_CHANNELS,
    Channel,
    ChannelDirectory,
    RevenueEstimate,
    default_channels,
    estimate_revenue,
)

__all__ = [
    "DEFAULT_CHANNELS",
    "Channel",
    "ChannelDirectory",
    "RevenueEstimate",
    "default_channels",
    "estimate_revenue",
]
