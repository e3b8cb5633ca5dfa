from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from doccompare.processor.models import FileType, SourceFile
from doccompare.processor.progress import ProgressReporter


class ExtractionStage(str, Enum):
    """Per-document extraction state.

    NOT_STARTED -> STRUCTURAL_EXTRACTION_DONE -> [OCR_FALLBACK] -> COMPLETE.
    Images have no structural text and go straight to OCR_FALLBACK.
    """

    NOT_STARTED = "not_started"
    STRUCTURAL_EXTRACTION_DONE = "structural_extraction_done"
    OCR_FALLBACK = "ocr_fallback"
    COMPLETE = "complete"


_TRANSITIONS: dict[ExtractionStage, frozenset[ExtractionStage]] = {
    ExtractionStage.NOT_STARTED: frozenset(
        {ExtractionStage.STRUCTURAL_EXTRACTION_DONE, ExtractionStage.OCR_FALLBACK}
    ),
    ExtractionStage.STRUCTURAL_EXTRACTION_DONE: frozenset(
        {ExtractionStage.OCR_FALLBACK, ExtractionStage.COMPLETE}
    ),
    ExtractionStage.OCR_FALLBACK: frozenset({ExtractionStage.COMPLETE}),
    ExtractionStage.COMPLETE: frozenset(),
}


@dataclass(slots=True)
class ExtractionContext:
    source: SourceFile
    file_type: FileType
    progress: ProgressReporter
    force_ocr: bool = False
    password: str | None = None
    stage: ExtractionStage = ExtractionStage.NOT_STARTED
    text: str = ""
    page_count: int | None = None
    is_scanned: bool = False
    used_ocr: bool = False
    ocr_confidence: float | None = None

    def advance(self, stage: ExtractionStage) -> None:
        if stage not in _TRANSITIONS[self.stage]:
            raise ValueError(
                f"Invalid extraction stage transition {self.stage.value} -> {stage.value}"
            )
        self.stage = stage


class ExtractionStep(ABC):
    @abstractmethod
    async def run(self, context: ExtractionContext) -> ExtractionContext:
        raise NotImplementedError
