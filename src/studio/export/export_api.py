"""API routes for the export queue and archive downloads."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from ..bundles.bundle_models import AssetBundle, VideoResource, VoiceoverResource
from ..exceptions import InvalidMediaError
from ..media.media_helpers import decode_data_uri
from ..media.media_models import MediaFile
from ..session import StudioSession
from .export_schemas import (
    BundleSummary,
    MetadataPayload,
    ProgressResponse,
    QueueResponse,
    ToggleResponse,
)
from .export_service import ExportOutcome

router = APIRouter(prefix="/api", tags=["export"])


def get_session(request: Request) -> StudioSession:
    try:
        return request.app.state.session  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("StudioSession is not configured") from exc


def _error(status_code: int, failure_reason: str, message: str | None = None) -> HTTPException:
    detail = {"status": "error", "failure_reason": failure_reason}
    if message:
        detail["message"] = message
    return HTTPException(status_code=status_code, detail=detail)


def _summary(session: StudioSession, bundle: AssetBundle) -> BundleSummary:
    return BundleSummary.from_bundle(bundle, selected=session.queue.is_selected(bundle.id))


@router.get("/queue", response_model=QueueResponse)
def list_queue(session: StudioSession = Depends(get_session)) -> QueueResponse:
    items = [_summary(session, bundle) for bundle in session.queue]
    return QueueResponse(items=items, selected_count=len(session.queue.selected_ids))


@router.post("/queue", response_model=BundleSummary, status_code=status.HTTP_201_CREATED)
async def enqueue_bundle(
    metadata: str = Form(...),
    channel_label: str | None = Form(default=None),
    video_uri: str | None = Form(default=None),
    thumbnail_image: str | None = Form(default=None),
    video: UploadFile | None = File(default=None),
    voiceover: UploadFile | None = File(default=None),
    session: StudioSession = Depends(get_session),
) -> BundleSummary:
    """Freeze uploaded generation outputs into a bundle and queue it."""
    try:
        payload = MetadataPayload.model_validate_json(metadata)
    except ValidationError as exc:
        raise _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid_metadata", str(exc.errors()[0]["msg"])
        ) from None

    if thumbnail_image:
        try:
            decode_data_uri(thumbnail_image)
        except InvalidMediaError as exc:
            raise _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid_thumbnail", str(exc)) from None

    video_bytes = await video.read() if video is not None else b""
    if not video_bytes and not video_uri:
        raise _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "video_required")
    voiceover_bytes = await voiceover.read() if voiceover is not None else b""

    video_url = None
    if video_bytes and video is not None:
        video_url = session.registry.register(
            MediaFile(
                name=video.filename or "video.mp4",
                data=video_bytes,
                content_type=video.content_type or "video/mp4",
            )
        ).url
    voiceover_resource = None
    if voiceover_bytes and voiceover is not None:
        handle = session.registry.register(
            MediaFile(
                name=voiceover.filename or "voiceover.wav",
                data=voiceover_bytes,
                content_type=voiceover.content_type or "audio/wav",
            )
        )
        voiceover_resource = VoiceoverResource(data=voiceover_bytes, playback_url=handle.url)

    bundle = AssetBundle.create(
        payload.to_metadata(),
        VideoResource(data=video_bytes or None, uri=video_uri or None, playback_url=video_url),
        thumbnail_image=thumbnail_image,
        voiceover=voiceover_resource,
        channel_label=channel_label,
    )
    session.queue.enqueue(bundle)
    return _summary(session, bundle)


@router.post("/queue/{bundle_id}/toggle", response_model=ToggleResponse)
def toggle_bundle(bundle_id: str, session: StudioSession = Depends(get_session)) -> ToggleResponse:
    if bundle_id not in session.queue:
        raise _error(status.HTTP_404_NOT_FOUND, "bundle_not_found")
    return ToggleResponse(id=bundle_id, selected=session.queue.toggle_selection(bundle_id))


@router.delete("/queue/{bundle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bundle(bundle_id: str, session: StudioSession = Depends(get_session)) -> Response:
    # deleting an absent entry is not an error
    session.exports.discard(bundle_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/export/progress", response_model=ProgressResponse)
def read_export_progress(session: StudioSession = Depends(get_session)) -> ProgressResponse:
    progress = session.exports.progress
    return ProgressResponse(
        in_progress=progress.in_progress,
        label=progress.label,
        active_exports=progress.active_count,
    )


@router.post("/export/batch")
async def export_batch(session: StudioSession = Depends(get_session)) -> Response:
    outcome = await session.exports.export_selected(session.export_context())
    return _archive_response(outcome)


@router.post("/export/{bundle_id}")
async def export_single(bundle_id: str, session: StudioSession = Depends(get_session)) -> Response:
    bundle = session.queue.get(bundle_id)
    if bundle is None:
        raise _error(status.HTTP_404_NOT_FOUND, "bundle_not_found")
    outcome = await session.exports.export_bundle(bundle, session.export_context())
    return _archive_response(outcome)


def _archive_response(outcome: ExportOutcome) -> Response:
    if outcome.archive is None:
        status_code = (
            status.HTTP_400_BAD_REQUEST
            if outcome.failure_reason == "nothing_selected"
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return JSONResponse(
            status_code=status_code,
            content={
                "status": "error",
                "failure_reason": outcome.failure_reason,
                "message": outcome.error,
            },
        )
    return Response(
        content=outcome.archive.data,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{outcome.filename}"'},
    )
