from pathlib import PurePath

from doccompare.processor.exceptions import UnsupportedFileTypeError
from doccompare.processor.models import FileType

PDF_EXTENSIONS = frozenset({".pdf"})
WORD_EXTENSIONS = frozenset({".docx", ".doc"})
IMAGE_EXTENSIONS = frozenset(
    {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp"}
)

PDF_MEDIA_TYPES = frozenset({"application/pdf"})
WORD_MEDIA_TYPES = frozenset(
    {
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


def detect_file_type(file_name: str, media_type: str = "") -> FileType:
    """Route a file by extension first, then by declared MIME type.

    Raises:
        UnsupportedFileTypeError: if neither matches a known family.
    """
    suffix = PurePath(file_name).suffix.lower()
    if suffix in PDF_EXTENSIONS:
        return FileType.PDF
    if suffix in WORD_EXTENSIONS:
        return FileType.WORD
    if suffix in IMAGE_EXTENSIONS:
        return FileType.IMAGE

    mime = media_type.split(";", 1)[0].strip().lower()
    if mime in PDF_MEDIA_TYPES:
        return FileType.PDF
    if mime in WORD_MEDIA_TYPES:
        return FileType.WORD
    if mime.startswith("image/"):
        return FileType.IMAGE

    raise UnsupportedFileTypeError(
        f"Unsupported file type for '{file_name}'. "
        "Please provide a PDF, Word document or image."
    )
