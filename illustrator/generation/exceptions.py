class GenerationError(Exception):
    """Raised when schema generation fails."""


class GenerationNetworkError(GenerationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
