import io

import pdfplumber
from pdfplumber.page import Page

from illustrator.pdf.base import BasePdfRasterizer
from illustrator.pdf.exceptions import RasterizationError

BASE_DPI = 72


class PdfPlumberAdapter(BasePdfRasterizer):
    """Renders PDF pages to PNG using pdfplumber (pypdfium2 backend)."""

    def rasterize(self, pdf_bytes: bytes, scale: float) -> list[bytes]:
        resolution = int(BASE_DPI * scale)
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [self._render_page(page, resolution) for page in pdf.pages]
        except RasterizationError:
            raise
        except Exception as exc:
            raise RasterizationError(f"pdfplumber rasterization failed: {exc}") from exc

    @staticmethod
    def _render_page(page: Page, resolution: int) -> bytes:
        try:
            with page.to_image(resolution=resolution).original as image:
                buf = io.BytesIO()
                image.save(buf, format="PNG")
                return buf.getvalue()
        finally:
            page.close()
