from dataclasses import dataclass, field


@dataclass(frozen=True)
class OcrLine:
    """One recognized text line and its engine confidence (0..100)."""

    text: str
    confidence: float


@dataclass(frozen=True)
class OcrPage:
    """Raw recognition output for one image."""

    lines: list[OcrLine] = field(default_factory=list)
    confidence: float = 0.0


@dataclass(frozen=True)
class OcrResult:
    """Filtered OCR text and the mean confidence of the pages that contributed."""

    text: str
    confidence: float
