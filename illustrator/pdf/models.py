import base64
from dataclasses import dataclass


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """Build a self-contained ``data:`` URI from raw bytes."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


@dataclass(frozen=True)
class RenderedPage:
    """One rasterized page of an uploaded document."""

    source_file_id: str
    page_index: int
    image: str
