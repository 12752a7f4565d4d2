import uuid
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from illustrator.config.settings import Settings
from illustrator.storage.postgres_store import PostgresKeyValueStore, build_conninfo


@pytest.fixture()
def sqlite_settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        storage_backend="sqlite",
        storage_path=str(tmp_path / "illustrator.db"),
        generation_provider="example",
    )


@pytest.fixture()
async def postgres_store() -> AsyncGenerator[PostgresKeyValueStore, None]:
    settings = Settings(_env_file=None)
    store = PostgresKeyValueStore(build_conninfo(settings))
    try:
        await store.set("__ping__", "1")
    except Exception as e:
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests"
        )
    try:
        yield store
    finally:
        await store.remove("__ping__")
        await store.close()


@pytest.fixture()
def unique_key() -> str:
    return f"test-{uuid.uuid4()}"
