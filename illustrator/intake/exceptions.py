class IntakeError(Exception):
    """Base exception for all intake-related errors."""


class FileReadError(IntakeError):
    """Raised when a file cannot be read from disk."""


class EmptyDocumentError(IntakeError):
    """Raised when a paginated document yields no pages."""
