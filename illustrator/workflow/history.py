import time
import uuid

from illustrator.logging.logger import Log
from illustrator.workflow.models import HistoryItem
from illustrator.workflow.store import WorkflowStore

MAX_HISTORY_ITEMS = 20


class HistoryManager:
    """Bounded, newest-first history of generation results kept in the workflow store."""

    def __init__(self, store: WorkflowStore, capacity: int = MAX_HISTORY_ITEMS) -> None:
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self._store = store
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        return len(self._store.history)

    def can_add(self) -> bool:
        """Informational: ``add`` always succeeds because it evicts the oldest entries."""
        return self.count < self._capacity

    def add(self, schema: str, image_url: str | None = None) -> HistoryItem:
        if not schema.strip():
            raise ValueError("History entries need a non-empty schema")
        item = HistoryItem(
            id=str(uuid.uuid4()),
            timestamp=int(time.time() * 1000),
            schema=schema,
            image_url=image_url,
        )
        history = [item, *self._store.history]
        evicted = len(history) - self._capacity
        if evicted > 0:
            Log.debug(f"Evicting {evicted} oldest history entries")
        self._store.set_history(history[: self._capacity])
        Log.info(f"Added history item {item.id}", count=min(len(history), self._capacity))
        return item

    def get(self, item_id: str) -> HistoryItem | None:
        return next((item for item in self._store.history if item.id == item_id), None)

    def load(self, item_id: str) -> bool:
        """Show a past result in the Render stage.

        Returns False for unknown ids and for entries that cannot reach Render.
        """
        item = self.get(item_id)
        if item is None:
            return False
        return self._store.show_result(item.schema, item.image_url)

    def delete(self, item_id: str) -> bool:
        history = self._store.history
        remaining = [item for item in history if item.id != item_id]
        if len(remaining) == len(history):
            return False
        self._store.set_history(remaining)
        return True

    def clear(self) -> None:
        self._store.set_history([])
