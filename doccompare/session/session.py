from collections.abc import Callable

from doccompare.comparison.comparator import TextComparator
from doccompare.logging.logger import Log
from doccompare.processor.exceptions import ComparisonCancelledError, ProcessorError
from doccompare.processor.models import DocumentExtractionResult, FileType
from doccompare.processor.processor import DocumentProcessor
from doccompare.processor.progress import ProgressReporter
from doccompare.session.models import DocumentInput, PairComparison, SessionResult
from doccompare.session.password_flow import PasswordFlow

DocumentProgressCallback = Callable[[str, float, str], None]

_LABELS = "ABC"


class ComparisonSession:
    """Extracts 2-3 documents one after another and compares them.

    The first document is the baseline; every other document is compared
    against it. Any failure ends the whole run; a cancelled password prompt
    ends it with :class:`ComparisonCancelledError`.
    """

    MIN_DOCUMENTS = 2
    MAX_DOCUMENTS = len(_LABELS)

    def __init__(
        self,
        processor: DocumentProcessor,
        password_flow: PasswordFlow,
        comparator: TextComparator | None = None,
        *,
        force_ocr: bool = False,
    ) -> None:
        self._processor = processor
        self._password_flow = password_flow
        self._comparator = comparator or TextComparator()
        self._force_ocr = force_ocr

    async def run(
        self,
        inputs: list[DocumentInput],
        on_progress: DocumentProgressCallback | None = None,
    ) -> SessionResult:
        if not self.MIN_DOCUMENTS <= len(inputs) <= self.MAX_DOCUMENTS:
            raise ValueError(
                f"Expected {self.MIN_DOCUMENTS} to {self.MAX_DOCUMENTS} documents, "
                f"got {len(inputs)}"
            )

        Log.info(f"Comparing {len(inputs)} documents")
        documents: list[DocumentExtractionResult] = []
        try:
            for index, document in enumerate(inputs):
                label = f"Document {_LABELS[index]}"
                documents.append(await self._extract(label, document, on_progress))
        except ComparisonCancelledError:
            Log.info("Comparison cancelled by user")
            raise
        except ProcessorError as exc:
            Log.error(f"Comparison failed: {exc}")
            raise

        baseline = documents[0]
        comparisons = []
        for other in documents[1:]:
            result = self._comparator.compare(baseline.text, other.text)
            Log.info(
                f"{baseline.file_name} vs {other.file_name}: {result.similarity}% similar"
                f"{' (exact match)' if result.is_exact_match else ''}"
            )
            comparisons.append(
                PairComparison(baseline=baseline.file_name, other=other.file_name, result=result)
            )
        return SessionResult(documents=documents, comparisons=comparisons)

    async def _extract(
        self,
        label: str,
        document: DocumentInput,
        on_progress: DocumentProgressCallback | None,
    ) -> DocumentExtractionResult:
        reporter = ProgressReporter(
            (lambda percent, message: on_progress(label, percent, message))
            if on_progress is not None
            else None
        )
        reporter.report(0, "Starting...")

        if document.source is None:
            reporter.report(100, "Reference text ready")
            return DocumentExtractionResult(
                text=document.text or "",
                file_name=document.name,
                file_type=FileType.TEXT,
            )

        source = document.source

        async def attempt(password: str | None) -> DocumentExtractionResult:
            return await self._processor.extract(
                source,
                force_ocr=self._force_ocr,
                on_progress=reporter.report,
                password=password,
            )

        return await self._password_flow.run(source.document_id, source.name, label, attempt)
