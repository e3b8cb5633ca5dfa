import hashlib
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property


class FileType(str, Enum):
    """Extraction route of a document."""

    PDF = "pdf"
    WORD = "word"
    IMAGE = "image"
    TEXT = "text"


@dataclass(frozen=True)
class SourceFile:
    """A caller-owned document blob; never mutated or persisted."""

    name: str
    data: bytes = field(repr=False)
    media_type: str = ""

    @cached_property
    def document_id(self) -> str:
        """Content hash identifying the document within a session."""
        return hashlib.sha256(self.data).hexdigest()

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class DocumentExtractionResult:
    """Text recovered from one document, ready for comparison."""

    text: str
    file_name: str
    file_type: FileType
    used_ocr: bool = False
    ocr_confidence: float | None = None
    page_count: int | None = None
