from abc import ABC, abstractmethod


class BaseKeyValueStore(ABC):
    """Contract for async string-keyed persistence backends.

    Reads never raise: a missing, unreadable or corrupted record is reported
    as ``None``. Writes and removals raise ``StorageWriteError`` so the caller
    always learns about lost data.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or ``None`` if absent or unreadable."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Insert or replace a value.

        Raises:
            StorageWriteError: if the write is not committed.
        """

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete a value; deleting a missing key is not an error.

        Raises:
            StorageWriteError: if the deletion is not committed.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""
