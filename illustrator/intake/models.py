from dataclasses import dataclass, field

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class IncomingFile:
    """A file handed to the intake pipeline, before any conversion."""

    name: str
    mime_type: str
    data: bytes

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass
class UploadedFile:
    """An accepted file together with its preview.

    ``raw_data`` holds the data URI for raster images and the original bytes
    for PDFs.
    """

    id: str
    name: str
    mime_type: str
    raw_data: bytes | str
    preview_image: str | None = None
    page_count: int = 0


@dataclass(frozen=True)
class IntakeFailure:
    """A file of a batch that could not be converted."""

    file_name: str
    message: str


@dataclass
class IntakeResult:
    """Outcome of one ``ingest`` call."""

    added_files: list[UploadedFile] = field(default_factory=list)
    added_images: list[str] = field(default_factory=list)
    failures: list[IntakeFailure] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
