import pytest

from illustrator.config.settings import Settings
from illustrator.intake.coordinator import IntakeCoordinator
from illustrator.intake.models import IncomingFile
from illustrator.pdf.engine import RasterizationEngine
from tests.factories import build_pdf, build_png


def _coordinator(engine_name: str) -> IntakeCoordinator:
    settings = Settings(_env_file=None, pdf_engine=engine_name, render_scale=1.0)
    return IntakeCoordinator(RasterizationEngine(settings))


@pytest.fixture(params=["pymupdf", "pdfplumber"])
def coordinator(request: pytest.FixtureRequest) -> IntakeCoordinator:
    return _coordinator(request.param)


class TestRealEngines:
    async def test_pdf_pages_in_order_with_preview(
        self, coordinator: IntakeCoordinator, three_page_pdf_bytes: bytes
    ) -> None:
        result = await coordinator.ingest(
            [IncomingFile("paper.pdf", "application/pdf", three_page_pdf_bytes)]
        )

        assert result.ok
        uploaded = result.added_files[0]
        assert uploaded.page_count == 3
        assert len(coordinator.images) == 3
        assert uploaded.preview_image == coordinator.images[0]
        assert len(set(coordinator.images)) == 3

    async def test_mixed_batch_isolates_broken_pdf(
        self, coordinator: IntakeCoordinator
    ) -> None:
        batch = [
            IncomingFile("first.png", "image/png", build_png("red")),
            IncomingFile("broken.pdf", "application/pdf", b"%PDF-1.4 truncated"),
            IncomingFile("paper.pdf", "application/pdf", build_pdf(["one", "two"])),
            IncomingFile("notes.txt", "text/plain", b"ignored"),
            IncomingFile("last.png", "image/png", build_png("blue")),
        ]

        result = await coordinator.ingest(batch)

        assert [f.name for f in coordinator.files] == ["first.png", "paper.pdf", "last.png"]
        assert len(coordinator.images) == 4
        assert [failure.file_name for failure in result.failures] == ["broken.pdf"]
        assert result.skipped == ["notes.txt"]

    async def test_remove_pdf_keeps_image_pages(self, coordinator: IntakeCoordinator) -> None:
        png = build_png("green")
        await coordinator.ingest(
            [
                IncomingFile("paper.pdf", "application/pdf", build_pdf(["a", "b"])),
                IncomingFile("fig.png", "image/png", png),
            ]
        )

        coordinator.remove_file(0)

        assert [f.name for f in coordinator.files] == ["fig.png"]
        assert coordinator.images == [coordinator.files[0].preview_image]
