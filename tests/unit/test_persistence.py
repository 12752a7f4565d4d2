import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from illustrator.storage.base import BaseKeyValueStore
from illustrator.storage.exceptions import StorageWriteError
from illustrator.workflow.models import ModelConfig, WorkflowSnapshot
from illustrator.workflow.persistence import SnapshotPersister
from illustrator.workflow.snapshot import decode_snapshot, encode_snapshot
from illustrator.workflow.store import WorkflowStore

KEY = "academic-illustrator-storage"


class InMemoryKeyValueStore(BaseKeyValueStore):
    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.writes = 0

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value

    async def remove(self, key: str) -> None:
        self.data.pop(key, None)

    async def close(self) -> None:
        pass


def _failing_kv_store(stored: str | None = None) -> MagicMock:
    kv_store = MagicMock(spec=BaseKeyValueStore)
    kv_store.get = AsyncMock(return_value=stored)
    kv_store.set = AsyncMock(side_effect=StorageWriteError("disk full"))
    kv_store.remove = AsyncMock(side_effect=StorageWriteError("disk full"))
    return kv_store


class TestHydrate:
    async def test_defaults_when_nothing_stored(self, defaults: WorkflowSnapshot) -> None:
        store = WorkflowStore(defaults)
        await SnapshotPersister(InMemoryKeyValueStore(), KEY, defaults).hydrate(store)
        assert store.has_hydrated is True
        assert store.snapshot() == defaults

    async def test_restores_saved_snapshot(self, defaults: WorkflowSnapshot) -> None:
        kv_store = InMemoryKeyValueStore()
        saved = WorkflowSnapshot(
            logic_config=ModelConfig("https://llm", "sk", "m"),
            vision_config=defaults.vision_config,
            language="en",
            paper_content="content",
            generated_schema="schema",
        )
        kv_store.data[KEY] = encode_snapshot(saved)
        store = WorkflowStore(defaults)

        await SnapshotPersister(kv_store, KEY, defaults).hydrate(store)

        assert store.snapshot() == saved

    async def test_read_failure_yields_defaults(self, defaults: WorkflowSnapshot) -> None:
        kv_store = _failing_kv_store(stored=None)
        store = WorkflowStore(defaults)
        await SnapshotPersister(kv_store, KEY, defaults).hydrate(store)
        assert store.has_hydrated is True
        assert store.snapshot() == defaults

    async def test_hydrates_only_once(self, defaults: WorkflowSnapshot) -> None:
        kv_store = InMemoryKeyValueStore()
        kv_store.get = AsyncMock(return_value=None)  # type: ignore[method-assign]
        persister = SnapshotPersister(kv_store, KEY, defaults)
        store = WorkflowStore(defaults)

        await persister.hydrate(store)
        await persister.hydrate(store)

        kv_store.get.assert_awaited_once_with(KEY)


class TestAutomaticSaves:
    async def test_mutation_is_persisted_after_flush(self, defaults: WorkflowSnapshot) -> None:
        kv_store = InMemoryKeyValueStore()
        persister = SnapshotPersister(kv_store, KEY, defaults)
        store = WorkflowStore(defaults)
        await persister.hydrate(store)
        persister.attach(store)

        store.set_paper_content("draft")
        await persister.flush()

        assert decode_snapshot(kv_store.data[KEY], defaults).paper_content == "draft"

    async def test_latest_snapshot_wins(self, defaults: WorkflowSnapshot) -> None:
        kv_store = InMemoryKeyValueStore()
        persister = SnapshotPersister(kv_store, KEY, defaults)
        store = WorkflowStore(defaults)
        await persister.hydrate(store)
        persister.attach(store)

        for i in range(5):
            store.set_paper_content(f"draft {i}")
        await persister.flush()

        assert decode_snapshot(kv_store.data[KEY], defaults).paper_content == "draft 4"
        assert kv_store.writes <= 5

    async def test_no_save_before_hydration(self, defaults: WorkflowSnapshot) -> None:
        kv_store = InMemoryKeyValueStore()
        persister = SnapshotPersister(kv_store, KEY, defaults)
        store = WorkflowStore(defaults)
        persister.attach(store)

        store.set_paper_content("too early")
        await persister.flush()

        assert kv_store.data == {}

    async def test_detach_stops_saving(self, defaults: WorkflowSnapshot) -> None:
        kv_store = InMemoryKeyValueStore()
        persister = SnapshotPersister(kv_store, KEY, defaults)
        store = WorkflowStore(defaults)
        await persister.hydrate(store)
        detach = persister.attach(store)
        detach()

        store.set_paper_content("ignored")
        await persister.flush()

        assert kv_store.data == {}

    def test_change_outside_event_loop_is_written_on_flush(
        self, defaults: WorkflowSnapshot
    ) -> None:
        kv_store = InMemoryKeyValueStore()
        persister = SnapshotPersister(kv_store, KEY, defaults)
        store = WorkflowStore(defaults)
        store.apply_hydration(None)
        persister.attach(store)

        store.set_paper_content("offline edit")
        assert kv_store.writes == 0

        asyncio.run(persister.flush())

        assert decode_snapshot(kv_store.data[KEY], defaults).paper_content == "offline edit"


class TestWriteFailures:
    async def test_save_propagates_failure(self, defaults: WorkflowSnapshot) -> None:
        persister = SnapshotPersister(_failing_kv_store(), KEY, defaults)
        with pytest.raises(StorageWriteError, match="disk full"):
            await persister.save(defaults)

    async def test_flush_surfaces_background_failure(self, defaults: WorkflowSnapshot) -> None:
        persister = SnapshotPersister(_failing_kv_store(), KEY, defaults)
        store = WorkflowStore(defaults)
        await persister.hydrate(store)
        persister.attach(store)

        store.set_paper_content("lost")

        with pytest.raises(StorageWriteError, match="disk full"):
            await persister.flush()
        await persister.flush()

    async def test_clear_propagates_failure(self, defaults: WorkflowSnapshot) -> None:
        persister = SnapshotPersister(_failing_kv_store(), KEY, defaults)
        with pytest.raises(StorageWriteError):
            await persister.clear()
