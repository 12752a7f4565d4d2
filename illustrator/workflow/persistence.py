"""Persistence boundary between the workflow store and the key-value store."""

import asyncio
from collections.abc import Callable

from illustrator.logging.logger import Log
from illustrator.storage.base import BaseKeyValueStore
from illustrator.storage.exceptions import StorageWriteError
from illustrator.workflow.models import WorkflowSnapshot
from illustrator.workflow.snapshot import decode_snapshot, encode_snapshot
from illustrator.workflow.store import WorkflowStore


class SnapshotPersister:
    """Loads the workflow snapshot at startup and writes it back on change.

    Writes triggered by store notifications run in a background task; a newer
    snapshot replaces one that has not been written yet. ``flush`` waits for
    the task and re-raises the first write failure.
    """

    def __init__(
        self,
        kv_store: BaseKeyValueStore,
        key: str,
        defaults: WorkflowSnapshot,
        max_history_items: int | None = None,
    ) -> None:
        self._kv_store = kv_store
        self._key = key
        self._defaults = defaults
        self._max_history_items = max_history_items
        self._hydration_started = False
        self._pending: WorkflowSnapshot | None = None
        self._task: asyncio.Task[None] | None = None
        self._errors: list[StorageWriteError] = []

    async def hydrate(self, store: WorkflowStore) -> None:
        """Perform the single startup load into ``store``."""
        if self._hydration_started or store.has_hydrated:
            Log.warning("Hydration already performed, ignoring")
            return
        self._hydration_started = True
        raw = await self._kv_store.get(self._key)
        snapshot = None
        if raw is not None:
            snapshot = decode_snapshot(raw, self._defaults, self._max_history_items)
        store.apply_hydration(snapshot)
        Log.info(
            "Workflow state hydrated"
            + (f" ({len(snapshot.history)} history items)" if snapshot else " (defaults)")
        )

    def attach(self, store: WorkflowStore) -> Callable[[], None]:
        """Persist every change of ``store``; returns a detach callable."""

        def on_change(snapshot: WorkflowSnapshot) -> None:
            if not store.has_hydrated:
                Log.debug("Skipping save before hydration")
                return
            self.schedule(snapshot)

        return store.subscribe(on_change)

    def schedule(self, snapshot: WorkflowSnapshot) -> None:
        """Queue ``snapshot`` for writing.

        Without a running event loop the snapshot stays queued until ``flush``.
        """
        self._pending = snapshot
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            Log.debug("No running event loop, deferring save until flush")
            return
        if self._task is None or self._task.done():
            self._task = loop.create_task(self._drain())

    async def save(self, snapshot: WorkflowSnapshot) -> None:
        """Write ``snapshot`` now.

        Raises:
            StorageWriteError: if the store rejects the write.
        """
        await self._kv_store.set(self._key, encode_snapshot(snapshot))

    async def flush(self) -> None:
        """Wait until queued snapshots are written.

        Raises:
            StorageWriteError: the first write failure since the last flush.
        """
        while self._task is not None and not self._task.done():
            await self._task
        await self._drain()
        if self._errors:
            error = self._errors[0]
            self._errors.clear()
            raise error

    async def clear(self) -> None:
        """Delete the persisted record."""
        await self.flush()
        await self._kv_store.remove(self._key)

    async def _drain(self) -> None:
        while self._pending is not None:
            snapshot = self._pending
            self._pending = None
            try:
                await self.save(snapshot)
            except StorageWriteError as exc:
                self._errors.append(exc)
