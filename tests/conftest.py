from __future__ import annotations

import pytest

from src.studio.branding.branding_service import BrandingService
from src.studio.media.media_registry import MediaResourceRegistry


@pytest.fixture
def registry() -> MediaResourceRegistry:
    return MediaResourceRegistry()


@pytest.fixture
def branding(registry: MediaResourceRegistry) -> BrandingService:
    return BrandingService(registry=registry)
