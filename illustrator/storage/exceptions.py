class StorageError(Exception):
    """Base exception for persistent store errors."""


class StorageWriteError(StorageError):
    """Raised when a value cannot be written to or removed from the store."""
