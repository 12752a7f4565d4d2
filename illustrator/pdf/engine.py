"""Lazily-initialized rasterization engine shared by the intake pipeline."""

import asyncio

from illustrator.config.settings import Settings
from illustrator.logging.logger import Log
from illustrator.pdf.base import BasePdfRasterizer
from illustrator.pdf.exceptions import RasterizationError, RasterizerNotReadyError
from illustrator.pdf.factory import PdfRasterizerFactory
from illustrator.pdf.models import RenderedPage, encode_data_uri


class RasterizationEngine:
    """Wraps the configured PDF rasterizer behind a one-time async initialization.

    The adapter (and with it the rendering library) is loaded on the first
    call to :meth:`initialize` and cached for the lifetime of the engine.
    Rendering before that point is rejected with ``RasterizerNotReadyError``.
    """

    def __init__(
        self,
        settings: Settings,
        rasterizer: BasePdfRasterizer | None = None,
    ) -> None:
        self._settings = settings
        self._rasterizer = rasterizer
        self._scale = settings.render_scale
        self._lock = asyncio.Lock()

    @property
    def ready(self) -> bool:
        return self._rasterizer is not None

    async def initialize(self) -> None:
        """Load the rendering capability once; later calls return immediately."""
        if self._rasterizer is not None:
            return
        async with self._lock:
            if self._rasterizer is not None:
                return
            self._rasterizer = await asyncio.to_thread(
                PdfRasterizerFactory.create, self._settings
            )
            Log.info(f"Rasterization engine ready ({self._settings.pdf_engine})")

    async def render(self, document_bytes: bytes, document_id: str) -> list[RenderedPage]:
        """Rasterize every page of a document, in page order.

        Raises:
            RasterizerNotReadyError: if :meth:`initialize` has not completed.
            RasterizationError: if the document cannot be opened or rendered.
        """
        rasterizer = self._rasterizer
        if rasterizer is None:
            raise RasterizerNotReadyError(
                "Rasterization engine is not initialized", document_id=document_id
            )
        try:
            pages = await asyncio.to_thread(rasterizer.rasterize, document_bytes, self._scale)
        except RasterizationError as exc:
            raise RasterizationError(str(exc), document_id=document_id) from exc
        Log.debug(f"Rendered {len(pages)} pages for document {document_id}")
        return [
            RenderedPage(
                source_file_id=document_id,
                page_index=index,
                image=encode_data_uri(png, "image/png"),
            )
            for index, png in enumerate(pages)
        ]
