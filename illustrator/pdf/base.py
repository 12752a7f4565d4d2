from abc import ABC, abstractmethod


class BasePdfRasterizer(ABC):
    """Contract for all PDF rasterization adapters."""

    @abstractmethod
    def rasterize(self, pdf_bytes: bytes, scale: float) -> list[bytes]:
        """Render every page of a PDF into PNG images.

        Args:
            pdf_bytes: Raw PDF file content.
            scale: Upscaling factor relative to 72 DPI.

        Returns:
            PNG-encoded pages, first page first.

        Raises:
            RasterizationError: if the document cannot be opened or any page
                fails to render. No partial result is returned.
        """
