import mimetypes
from pathlib import Path

from illustrator.intake.exceptions import FileReadError
from illustrator.intake.models import IncomingFile

DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(path: Path) -> str:
    """Declared media type of a file, derived from its extension."""
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or DEFAULT_MIME_TYPE


class FileLoader:
    """Reads local files into ``IncomingFile`` records."""

    def load(self, path: Path) -> IncomingFile:
        """Read file bytes from disk.

        Raises:
            FileReadError: if the path does not exist or cannot be read.
        """
        if not path.is_file():
            raise FileReadError(f"File not found: {path}")
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Cannot read {path}: {exc}") from exc
        return IncomingFile(name=path.name, mime_type=guess_mime_type(path), data=data)
