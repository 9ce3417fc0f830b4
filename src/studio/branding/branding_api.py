"""API routes for branding uploads and settings."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from ..exceptions import InvalidMediaError
from ..media.media_helpers import decode_data_uri
from ..media.media_models import MediaFile
from ..session import StudioSession
from .branding_schemas import (
    BrandingResponseModel,
    BumperModel,
    MusicSelectionRequest,
    MusicTrackModel,
    WatermarkUpdateRequest,
)
from .branding_service import Bumper

router = APIRouter(prefix="/api/branding", tags=["branding"])


def get_session(request: Request) -> StudioSession:
    try:
        return request.app.state.session  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("StudioSession is not configured") from exc


def _snapshot(session: StudioSession) -> BrandingResponseModel:
    return BrandingResponseModel.from_assets(
        session.branding.assets, selected_music_id=session.selected_music_id
    )


async def _read_upload(upload: UploadFile, default_name: str) -> MediaFile:
    data = await upload.read()
    if not data:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"status": "error", "failure_reason": "empty_upload"},
        )
    return MediaFile(
        name=upload.filename or default_name,
        data=data,
        content_type=upload.content_type or "application/octet-stream",
    )


@router.get("", response_model=BrandingResponseModel)
def read_branding(session: StudioSession = Depends(get_session)) -> BrandingResponseModel:
    return _snapshot(session)


@router.put("/watermark", response_model=BrandingResponseModel)
def update_watermark(
    payload: WatermarkUpdateRequest,
    session: StudioSession = Depends(get_session),
) -> BrandingResponseModel:
    changes = payload.model_dump(exclude_none=True)
    if data_url := changes.get("data_url"):
        try:
            decode_data_uri(data_url)
        except InvalidMediaError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={"status": "error", "failure_reason": "invalid_image", "message": str(exc)},
            ) from None
    session.branding.update_watermark(changes)
    return _snapshot(session)


@router.delete("/watermark/image", response_model=BrandingResponseModel)
def clear_watermark_image(session: StudioSession = Depends(get_session)) -> BrandingResponseModel:
    session.branding.clear_watermark_image()
    return _snapshot(session)


@router.put("/{kind}", response_model=BumperModel)
async def upload_bumper(
    kind: Bumper,
    file: UploadFile = File(...),
    session: StudioSession = Depends(get_session),
) -> BumperModel:
    media = await _read_upload(file, f"{kind.value}.mp4")
    return BumperModel.from_asset(session.branding.set_bumper(kind, media))


@router.delete("/{kind}", response_model=BumperModel)
def clear_bumper(kind: Bumper, session: StudioSession = Depends(get_session)) -> BumperModel:
    session.branding.clear_bumper(kind)
    return BumperModel.from_asset(
        session.branding.assets.intro if kind is Bumper.INTRO else session.branding.assets.outro
    )


@router.post("/music", response_model=MusicTrackModel, status_code=status.HTTP_201_CREATED)
async def add_music_track(
    file: UploadFile = File(...),
    name: str | None = Form(default=None),
    session: StudioSession = Depends(get_session),
) -> MusicTrackModel:
    media = await _read_upload(file, "track.mp3")
    track = session.branding.add_music(media, name=name)
    return MusicTrackModel(id=track.id, name=track.name, url=track.url)


@router.delete("/music/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_music_track(track_id: str, session: StudioSession = Depends(get_session)) -> None:
    session.branding.remove_music(track_id)
    if session.selected_music_id == track_id:
        session.select_music(None)


@router.put("/music/selection", response_model=BrandingResponseModel)
def select_music_track(
    payload: MusicSelectionRequest,
    session: StudioSession = Depends(get_session),
) -> BrandingResponseModel:
    try:
        session.select_music(payload.track_id)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "track_not_found"},
        ) from None
    return _snapshot(session)
