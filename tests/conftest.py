import pytest

from illustrator.config.settings import Settings
from illustrator.workflow.models import WorkflowSnapshot, default_snapshot
from tests.factories import build_pdf


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return build_pdf(["Hello PDF World"])


@pytest.fixture()
def three_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF with known text on each page."""
    return build_pdf(["Page one content", "Page two content", "Page three content"])


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture()
def defaults(settings: Settings) -> WorkflowSnapshot:
    return default_snapshot(settings)
