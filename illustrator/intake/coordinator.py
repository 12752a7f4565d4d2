import uuid
from collections.abc import Iterable

from illustrator.intake.exceptions import EmptyDocumentError
from illustrator.intake.models import (
    IncomingFile,
    IntakeFailure,
    IntakeResult,
    UploadedFile,
)
from illustrator.logging.logger import Log
from illustrator.pdf.engine import RasterizationEngine
from illustrator.pdf.models import encode_data_uri


class IntakeCoordinator:
    """Accumulates uploaded files and the flattened list of page images.

    Files of a batch are converted one after another; each file is committed
    as soon as it succeeds, so a failure never discards earlier results and
    never stops later files.
    """

    def __init__(self, rasterizer: RasterizationEngine) -> None:
        self._rasterizer = rasterizer
        self._files: list[UploadedFile] = []
        # (owning file id, image) in document order
        self._pages: list[tuple[str, str]] = []

    @property
    def files(self) -> list[UploadedFile]:
        return list(self._files)

    @property
    def images(self) -> list[str]:
        return [image for _, image in self._pages]

    async def ingest(self, batch: Iterable[IncomingFile]) -> IntakeResult:
        """Convert a batch of files and append the results to the current state."""
        result = IntakeResult()
        for incoming in batch:
            if not (incoming.is_pdf or incoming.is_image):
                Log.debug(f"Skipping unsupported file {incoming.name} ({incoming.mime_type})")
                result.skipped.append(incoming.name)
                continue
            try:
                uploaded, images = await self._convert(incoming)
            except Exception as exc:
                Log.warning(f"Failed to process {incoming.name}: {exc}")
                result.failures.append(IntakeFailure(file_name=incoming.name, message=str(exc)))
                continue
            self._commit(uploaded, images)
            result.added_files.append(uploaded)
            result.added_images.extend(images)

        Log.info(
            f"Intake batch finished: {len(result.added_files)} files, "
            f"{len(result.added_images)} images, {len(result.failures)} failures, "
            f"{len(result.skipped)} skipped"
        )
        return result

    def remove_file(self, index: int) -> UploadedFile:
        """Remove one file and the pages derived from it.

        Raises:
            IndexError: if ``index`` does not point at an uploaded file.
        """
        if not 0 <= index < len(self._files):
            raise IndexError(f"No uploaded file at index {index}")
        removed = self._files.pop(index)
        if not self._files:
            self._pages.clear()
        else:
            self._pages = [page for page in self._pages if page[0] != removed.id]
        Log.debug(f"Removed {removed.name}, {len(self._pages)} images remain")
        return removed

    def clear(self) -> None:
        self._files.clear()
        self._pages.clear()

    async def _convert(self, incoming: IncomingFile) -> tuple[UploadedFile, list[str]]:
        file_id = str(uuid.uuid4())
        if incoming.is_pdf:
            return await self._convert_pdf(file_id, incoming)
        image = encode_data_uri(incoming.data, incoming.mime_type)
        uploaded = UploadedFile(
            id=file_id,
            name=incoming.name,
            mime_type=incoming.mime_type,
            raw_data=image,
            preview_image=image,
            page_count=1,
        )
        return uploaded, [image]

    async def _convert_pdf(
        self, file_id: str, incoming: IncomingFile
    ) -> tuple[UploadedFile, list[str]]:
        await self._rasterizer.initialize()
        Log.info(f"Processing PDF: {incoming.name}")
        pages = await self._rasterizer.render(incoming.data, file_id)
        if not pages:
            raise EmptyDocumentError(f"{incoming.name} has no pages")
        images = [page.image for page in pages]
        uploaded = UploadedFile(
            id=file_id,
            name=incoming.name,
            mime_type=incoming.mime_type,
            raw_data=incoming.data,
            preview_image=images[0],
            page_count=len(images),
        )
        Log.info(f"PDF {incoming.name} converted to {len(images)} images")
        return uploaded, images

    def _commit(self, uploaded: UploadedFile, images: list[str]) -> None:
        self._files.append(uploaded)
        self._pages.extend((uploaded.id, image) for image in images)
