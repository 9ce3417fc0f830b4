"""Deterministic names for archive folders and download files."""

from __future__ import annotations

import re
from datetime import date
from typing import Sequence

from ..bundles.bundle_models import AssetBundle

_NON_ALNUM = re.compile(r"[^a-z0-9]", re.IGNORECASE)
_PATH_SEPARATORS = re.compile(r"[\\/]")

DEFAULT_SLUG_LENGTH = 30
DEFAULT_CHANNEL_PREFIX_LENGTH = 15
BATCH_FILENAME_PREFIX = "veo_studio_batch"


def slugify_title(title: str, *, max_length: int = DEFAULT_SLUG_LENGTH) -> str:
    """Replace every non ``[a-z0-9]`` character with ``_`` and lowercase."""
    return _NON_ALNUM.sub("_", title).lower()[:max_length]


def bundle_folder_name(
    bundle: AssetBundle,
    *,
    slug_length: int = DEFAULT_SLUG_LENGTH,
    channel_prefix_length: int = DEFAULT_CHANNEL_PREFIX_LENGTH,
) -> str:
    """``<channel prefix>_<title slug>``, or the slug alone without a channel."""
    slug = slugify_title(bundle.metadata.title, max_length=slug_length)
    if not bundle.channel_label:
        return slug
    prefix = _PATH_SEPARATORS.sub("_", bundle.channel_label[:channel_prefix_length])
    return f"{prefix}_{slug}"


def unique_folder_names(
    bundles: Sequence[AssetBundle],
    *,
    slug_length: int = DEFAULT_SLUG_LENGTH,
    channel_prefix_length: int = DEFAULT_CHANNEL_PREFIX_LENGTH,
) -> list[str]:
    """Folder name per bundle; later collisions get ``_2``, ``_3``... suffixes."""
    names: list[str] = []
    taken: set[str] = set()
    for bundle in bundles:
        base = bundle_folder_name(
            bundle, slug_length=slug_length, channel_prefix_length=channel_prefix_length
        ) or "project"
        candidate = base
        counter = 2
        while candidate in taken:
            candidate = f"{base}_{counter}"
            counter += 1
        taken.add(candidate)
        names.append(candidate)
    return names


def batch_archive_filename(today: date) -> str:
    return f"{BATCH_FILENAME_PREFIX}_{today.isoformat()}.zip"


def single_archive_filename(title: str) -> str:
    return f"{_NON_ALNUM.sub('_', title).lower()}_package.zip"
