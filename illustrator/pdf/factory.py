import importlib
from typing import ClassVar

from illustrator.config.settings import Settings
from illustrator.pdf.base import BasePdfRasterizer


class PdfRasterizerFactory:
    """Creates the configured PDF rasterizer.

    Adapter modules are imported on demand so only the selected rendering
    library is loaded into the process.
    """

    ADAPTERS: ClassVar[dict[str, tuple[str, str]]] = {
        "pymupdf": ("illustrator.pdf.pymupdf_adapter", "PyMuPdfAdapter"),
        "pdfplumber": ("illustrator.pdf.pdfplumber_adapter", "PdfPlumberAdapter"),
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfRasterizer:
        engine = settings.pdf_engine.lower()
        target = cls.ADAPTERS.get(engine)
        if target is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        module_name, class_name = target
        module = importlib.import_module(module_name)
        adapter_cls: type[BasePdfRasterizer] = getattr(module, class_name)
        return adapter_cls()
