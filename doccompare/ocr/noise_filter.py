"""Drops OCR lines that are probably logos, signatures or decoration."""

from collections.abc import Iterable
from dataclasses import dataclass

from doccompare.ocr.models import OcrLine


@dataclass(frozen=True)
class OcrNoiseFilter:
    """Line-level noise rules.

    A line is dropped when its confidence is below ``min_confidence``, when it
    is longer than 3 characters and fewer than ``min_alnum_ratio`` of its
    characters are letters or digits, or when it is at most
    ``short_line_max_length`` characters long with confidence below
    ``short_line_min_confidence``.
    """

    min_confidence: float = 40.0
    min_alnum_ratio: float = 0.3
    short_line_max_length: int = 2
    short_line_min_confidence: float = 70.0

    def keep(self, line: OcrLine) -> bool:
        text = line.text.strip()
        if not text:
            return False
        if line.confidence < self.min_confidence:
            return False
        alnum = sum(1 for ch in text if ch.isalnum())
        if len(text) > 3 and alnum / len(text) < self.min_alnum_ratio:
            return False
        if len(text) <= self.short_line_max_length and line.confidence < self.short_line_min_confidence:
            return False
        return True

    def filter(self, lines: Iterable[OcrLine]) -> list[OcrLine]:
        """Return the surviving lines, stripped, in their original order."""
        return [
            OcrLine(text=line.text.strip(), confidence=line.confidence)
            for line in lines
            if self.keep(line)
        ]
