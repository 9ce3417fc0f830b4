"""Translate failures into the single status line shown to the user."""

from __future__ import annotations

import httpx

from .exceptions import UpstreamQuotaError

QUOTA_MESSAGE = (
    "API quota reached (error 429). The generation service limits the number of "
    "requests per minute; wait 1 to 2 minutes before retrying."
)
DETAIL_EXCERPT_LENGTH = 100

_QUOTA_MARKERS = ("429", "RESOURCE_EXHAUSTED")


def is_quota_error(exc: BaseException) -> bool:
    if isinstance(exc, UpstreamQuotaError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code == 429
    message = str(exc)
    return any(marker in message for marker in _QUOTA_MARKERS)


def describe_failure(exc: BaseException, default_message: str) -> str:
    """Quota errors get a retry hint; anything else a short diagnostic excerpt."""
    if is_quota_error(exc):
        return QUOTA_MESSAGE
    detail = str(exc) or exc.__class__.__name__
    if len(detail) > DETAIL_EXCERPT_LENGTH:
        detail = detail[:DETAIL_EXCERPT_LENGTH] + "..."
    return f"{default_message}: {detail}"
