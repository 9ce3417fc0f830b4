"""Dashboard API: channels, publish links and revenue estimate."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from ..session import StudioSession
from .channel_models import Channel, estimate_revenue

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


class ChannelModel(BaseModel):
    id: str
    name: str
    theme: str
    connected: bool
    youtube_handle: str | None = None
    rpm: float | None = None
    avg_views: int | None = None
    publish_url: str

    @classmethod
    def from_channel(cls, channel: Channel) -> "ChannelModel":
        return cls(
            id=channel.id,
            name=channel.name,
            theme=channel.theme,
            connected=channel.connected,
            youtube_handle=channel.youtube_handle,
            rpm=channel.rpm,
            avg_views=channel.avg_views,
            publish_url=channel.publish_url,
        )


class DashboardResponse(BaseModel):
    channels: list[ChannelModel] = Field(default_factory=list)
    queued_count: int
    estimated_views: int
    estimated_revenue: float


class HandleUpdateRequest(BaseModel):
    youtube_handle: str = Field(max_length=100)


def get_session(request: Request) -> StudioSession:
    try:
        return request.app.state.session  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("StudioSession is not configured") from exc


def _channel_or_404(channel: Channel | None) -> ChannelModel:
    if channel is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "channel_not_found"},
        )
    return ChannelModel.from_channel(channel)


@router.get("", response_model=DashboardResponse)
def read_dashboard(session: StudioSession = Depends(get_session)) -> DashboardResponse:
    channels = session.channels.channels
    estimate = estimate_revenue(session.queue, channels)
    return DashboardResponse(
        channels=[ChannelModel.from_channel(channel) for channel in channels],
        queued_count=len(session.queue),
        estimated_views=estimate.total_views,
        estimated_revenue=estimate.total_revenue,
    )


@router.post("/channels/{channel_id}/connection", response_model=ChannelModel)
def toggle_channel_connection(
    channel_id: str, session: StudioSession = Depends(get_session)
) -> ChannelModel:
    return _channel_or_404(session.channels.toggle_connection(channel_id))


@router.put("/channels/{channel_id}/handle", response_model=ChannelModel)
def update_channel_handle(
    channel_id: str,
    payload: HandleUpdateRequest,
    session: StudioSession = Depends(get_session),
) -> ChannelModel:
    return _channel_or_404(session.channels.set_handle(channel_id, payload.youtube_handle))
