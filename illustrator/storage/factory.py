from illustrator.config.settings import Settings
from illustrator.storage.base import BaseKeyValueStore
from illustrator.storage.postgres_store import PostgresKeyValueStore, build_conninfo
from illustrator.storage.sqlite_store import SqliteKeyValueStore


class KeyValueStoreFactory:
    """Creates the configured persistence backend."""

    BACKENDS = ("sqlite", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseKeyValueStore:
        backend = settings.storage_backend.lower()
        if backend == "sqlite":
            return SqliteKeyValueStore(settings.storage_path)
        if backend == "postgres":
            return PostgresKeyValueStore(build_conninfo(settings))
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
