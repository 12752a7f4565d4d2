class WorkflowError(Exception):
    """Base exception for workflow state errors."""


class HydrationError(WorkflowError):
    """Raised when persisted state is applied to a store more than once."""


class SubmissionError(WorkflowError):
    """Raised when the current intake cannot be submitted for generation."""


class MissingApiKeyError(SubmissionError):
    """Raised when the logic model has no API key configured."""


class EmptySubmissionError(SubmissionError):
    """Raised when there is neither text nor an image to submit."""
