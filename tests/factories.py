"""Builders for small in-memory documents used across the test suite."""

import io

from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def build_pdf(page_texts: list[str]) -> bytes:
    """Letter-sized PDF with one line of text per page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in page_texts:
        c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


def build_png(color: str = "red", size: tuple[int, int] = (8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()
