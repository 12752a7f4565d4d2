from pathlib import Path

import pytest

from illustrator.intake.exceptions import FileReadError
from illustrator.intake.file_loader import FileLoader, guess_mime_type


class TestGuessMimeType:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("paper.pdf", "application/pdf"),
            ("figure.png", "image/png"),
            ("photo.JPG", "image/jpeg"),
            ("notes", "application/octet-stream"),
        ],
    )
    def test_maps_extension(self, name: str, expected: str) -> None:
        assert guess_mime_type(Path(name)) == expected


class TestLoad:
    def test_returns_incoming_file(self, tmp_path: Path) -> None:
        path = tmp_path / "paper.pdf"
        path.write_bytes(b"%PDF test content")

        incoming = FileLoader().load(path)

        assert incoming.name == "paper.pdf"
        assert incoming.mime_type == "application/pdf"
        assert incoming.data == b"%PDF test content"
        assert incoming.is_pdf

    def test_raises_when_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileReadError, match="missing.png"):
            FileLoader().load(tmp_path / "missing.png")

    def test_raises_for_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileReadError):
            FileLoader().load(tmp_path)
