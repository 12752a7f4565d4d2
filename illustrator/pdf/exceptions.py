class RasterizationError(Exception):
    """Raised when a document cannot be opened or one of its pages cannot be rendered."""

    def __init__(self, message: str, document_id: str | None = None) -> None:
        super().__init__(message)
        self.document_id = document_id


class RasterizerNotReadyError(RasterizationError):
    """Raised when rendering is requested before the engine has been initialized."""
