"""Ordered queue of bundles waiting for archive export."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from ..bundles.bundle_models import AssetBundle


@dataclass(slots=True)
class ExportQueue:
    """Bundles in insertion order plus a selection set keyed by bundle id.

    Every id in the selection set belongs to a queued bundle.  Toggling an
    id that is not queued is ignored (returns ``False``) rather than raised.
    """

    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    _bundles: dict[str, AssetBundle] = field(default_factory=dict)
    _selected: set[str] = field(default_factory=set)

    def enqueue(self, bundle: AssetBundle) -> None:
        """Append ``bundle`` and mark it selected."""
        if bundle.id in self._bundles:
            # re-enqueueing keeps the original position
            self._selected.add(bundle.id)
            return
        self._bundles[bundle.id] = bundle
        self._selected.add(bundle.id)
        self.log.info(
            "export.queue.enqueued",
            extra={"bundle_id": bundle.id, "queue_length": len(self._bundles)},
        )

    def remove(self, bundle_id: str) -> AssetBundle | None:
        """Drop the bundle and its selection flag; absent ids are a no-op."""
        bundle = self._bundles.pop(bundle_id, None)
        self._selected.discard(bundle_id)
        if bundle is not None:
            self.log.info("export.queue.removed", extra={"bundle_id": bundle_id})
        return bundle

    def toggle_selection(self, bundle_id: str) -> bool:
        """Flip selection; return the new state (``False`` for unknown ids)."""
        if bundle_id not in self._bundles:
            self.log.debug("export.queue.toggle_ignored", extra={"bundle_id": bundle_id})
            return False
        if bundle_id in self._selected:
            self._selected.remove(bundle_id)
            return False
        self._selected.add(bundle_id)
        return True

    def selected_bundles(self) -> list[AssetBundle]:
        """Selected bundles in queue order."""
        return [bundle for bundle_id, bundle in self._bundles.items() if bundle_id in self._selected]

    def is_selected(self, bundle_id: str) -> bool:
        return bundle_id in self._selected

    @property
    def selected_ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    def get(self, bundle_id: str) -> AssetBundle | None:
        return self._bundles.get(bundle_id)

    def clear(self) -> list[AssetBundle]:
        """Empty the queue (session teardown) and return what was dropped."""
        dropped = list(self._bundles.values())
        self._bundles.clear()
        self._selected.clear()
        return dropped

    def __iter__(self) -> Iterator[AssetBundle]:
        return iter(list(self._bundles.values()))

    def __len__(self) -> int:
        return len(self._bundles)

    def __contains__(self, bundle_id: object) -> bool:
        return bundle_id in self._bundles
