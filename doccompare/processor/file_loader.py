import mimetypes
from pathlib import Path

from doccompare.processor.models import SourceFile


class FileLoader:
    """Reads a document from disk into a :class:`SourceFile`."""

    def load(self, path: Path | str) -> SourceFile:
        """Read file bytes and guess the media type from the extension.

        Raises:
            FileNotFoundError: if the file does not exist.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        media_type, _ = mimetypes.guess_type(path.name)
        return SourceFile(
            name=path.name,
            data=path.read_bytes(),
            media_type=media_type or "",
        )
