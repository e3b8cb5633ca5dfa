from dataclasses import dataclass, field

from doccompare.comparison.models import ComparisonResult
from doccompare.processor.models import DocumentExtractionResult, SourceFile


@dataclass(frozen=True)
class DocumentInput:
    """One side of a comparison: a file to extract, or text typed by the user."""

    name: str
    source: SourceFile | None = None
    text: str | None = None

    def __post_init__(self) -> None:
        if (self.source is None) == (self.text is None):
            raise ValueError("DocumentInput needs exactly one of source or text")

    @classmethod
    def from_file(cls, source: SourceFile) -> "DocumentInput":
        return cls(name=source.name, source=source)

    @classmethod
    def from_text(cls, text: str, name: str = "Reference text") -> "DocumentInput":
        return cls(name=name, text=text)


@dataclass(frozen=True)
class PairComparison:
    """The baseline document compared against one other document."""

    baseline: str
    other: str
    result: ComparisonResult


@dataclass(frozen=True)
class SessionResult:
    documents: list[DocumentExtractionResult] = field(default_factory=list)
    comparisons: list[PairComparison] = field(default_factory=list)
