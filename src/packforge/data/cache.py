"""Explicit cache for fetched documents and validated snapshots."""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, Hashable

if TYPE_CHECKING:
    from packforge.domain.game_data import GameData

LOG = logging.getLogger(__name__)


class DocumentCache:
    """Holds parsed documents by location and validated snapshots by source set.

    Create one per process and pass it to every loader that should share it.
    Documents are stored only after the load that fetched them validated
    successfully; concurrent requests for the same location share one fetch,
    and concurrent loads of the same source set share one snapshot build.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, object] = {}
        self._snapshots: Dict[Hashable, "GameData"] = {}
        self._pending: Dict[str, asyncio.Future[object]] = {}
        self._pending_snapshots: Dict[Hashable, asyncio.Future["GameData"]] = {}

    def __contains__(self, location: object) -> bool:
        return location in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def get_document(self, location: str) -> object:
        """Return the cached document for ``location``; raise KeyError if absent."""
        return self._documents[location]

    def put_document(self, location: str, document: object) -> None:
        self._documents[location] = document

    def get_snapshot(self, key: Hashable) -> "GameData | None":
        return self._snapshots.get(key)

    def put_snapshot(self, key: Hashable, snapshot: "GameData") -> None:
        self._snapshots[key] = snapshot

    async def get_or_fetch(self, location: str, fetch: Callable[[], Awaitable[object]]) -> object:
        """Return the cached document or run ``fetch`` once for all concurrent callers."""
        if location in self._documents:
            return self._documents[location]
        pending = self._pending.get(location)
        if pending is None:
            pending = asyncio.ensure_future(fetch())
            self._pending[location] = pending
            pending.add_done_callback(lambda _task: self._pending.pop(location, None))
        return await asyncio.shield(pending)

    async def get_or_build_snapshot(
        self,
        key: Hashable,
        build: Callable[[], Awaitable["GameData"]],
    ) -> "GameData":
        """Return the cached snapshot or run ``build`` once for all concurrent callers.

        ``build`` is expected to store its result with :meth:`put_snapshot`.
        """
        snapshot = self._snapshots.get(key)
        if snapshot is not None:
            return snapshot
        pending = self._pending_snapshots.get(key)
        if pending is None:
            pending = asyncio.ensure_future(build())
            self._pending_snapshots[key] = pending
            pending.add_done_callback(lambda _task: self._pending_snapshots.pop(key, None))
        return await asyncio.shield(pending)

    def clear(self) -> None:
        """Forget every cached document and snapshot."""
        LOG.debug("clearing %d cached documents and %d snapshots", len(self._documents), len(self._snapshots))
        self._documents.clear()
        self._snapshots.clear()
