import pymupdf

from illustrator.pdf.base import BasePdfRasterizer
from illustrator.pdf.exceptions import RasterizationError


class PyMuPdfAdapter(BasePdfRasterizer):
    """Renders PDF pages to PNG using PyMuPDF."""

    def rasterize(self, pdf_bytes: bytes, scale: float) -> list[bytes]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                matrix = pymupdf.Matrix(scale, scale)
                return [self._render_page(page, matrix) for page in doc]
        except RasterizationError:
            raise
        except Exception as exc:
            raise RasterizationError(f"pymupdf rasterization failed: {exc}") from exc

    @staticmethod
    def _render_page(page: pymupdf.Page, matrix: pymupdf.Matrix) -> bytes:
        pixmap = page.get_pixmap(matrix=matrix, alpha=False)
        try:
            return pixmap.tobytes("png")
        finally:
            # pixmap samples live outside the Python heap until released
            del pixmap
