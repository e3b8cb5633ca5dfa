from dataclasses import dataclass


@dataclass(frozen=True)
class TextRun:
    """A positioned glyph run on a PDF page.

    ``x``/``y`` is the baseline origin in PDF user space: y grows upwards,
    so a higher ``y`` is higher on the page.
    """

    text: str
    x: float
    y: float
    width: float

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass(frozen=True)
class PdfExtractionResult:
    """Reading-order text recovered from a PDF's embedded glyphs."""

    text: str
    page_count: int
    is_scanned: bool


@dataclass(frozen=True)
class PreCheckResult:
    """Cheap up-front facts about a PDF, sampled from its first pages."""

    page_count: int = 0
    is_scanned: bool = False
    is_password_protected: bool = False
    sample_text_length: int = 0

    def exceeds_ocr_limit(self, limit: int) -> bool:
        """True when OCR would be cut off after ``limit`` pages."""
        return self.page_count > limit

    def ocr_pages(self, limit: int) -> int:
        """Number of pages OCR would actually process."""
        return min(self.page_count, limit)
