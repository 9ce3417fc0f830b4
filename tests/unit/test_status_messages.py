from __future__ import annotations

import httpx
import pytest

from src.studio.exceptions import UpstreamQuotaError
from src.studio.status_messages import QUOTA_MESSAGE, describe_failure, is_quota_error

pytestmark = pytest.mark.unit


def _status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://generation.example/v1/models")
    response = httpx.Response(code, request=request)
    return httpx.HTTPStatusError("upstream failure", request=request, response=response)


@pytest.mark.parametrize(
    "exc",
    [
        UpstreamQuotaError("slow down"),
        _status_error(429),
        RuntimeError("got status 429 from upstream"),
        RuntimeError("RESOURCE_EXHAUSTED: quota"),
    ],
)
def test_quota_errors_are_detected(exc: Exception) -> None:
    assert is_quota_error(exc)
    assert describe_failure(exc, "Generation failed") == QUOTA_MESSAGE


def test_other_status_codes_are_not_quota() -> None:
    assert not is_quota_error(_status_error(500))


def test_describe_failure_keeps_short_detail() -> None:
    assert describe_failure(ValueError("bad input"), "Failed") == "Failed: bad input"


def test_describe_failure_uses_class_name_without_message() -> None:
    assert describe_failure(MemoryError(), "Failed") == "Failed: MemoryError"
