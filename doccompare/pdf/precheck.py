"""Quick probe run before full extraction.

Reads at most the first few pages to guess whether the PDF is scanned and
whether it is encrypted, so the host can warn about OCR cost up front. The
scanned guess is a heuristic: image-only cover pages followed by real text
look scanned, and a sparse title page can look scanned too.
"""

from doccompare.logging.logger import Log
from doccompare.pdf.base import BasePdfBackend
from doccompare.pdf.exceptions import PdfPasswordError
from doccompare.pdf.models import PreCheckResult

OCR_PAGE_HARD_LIMIT = 50
TEXT_PDF_PAGE_LIMIT = 1000


class PdfPreChecker:
    """Samples the first pages of a PDF; never raises for encryption."""

    def __init__(
        self,
        backend: BasePdfBackend,
        *,
        sample_pages: int = 2,
        scanned_threshold: int = 50,
        ocr_page_hard_limit: int = OCR_PAGE_HARD_LIMIT,
        text_pdf_page_limit: int = TEXT_PDF_PAGE_LIMIT,
    ) -> None:
        self._backend = backend
        self._sample_pages = sample_pages
        self._scanned_threshold = scanned_threshold
        self.ocr_page_hard_limit = ocr_page_hard_limit
        self.text_pdf_page_limit = text_pdf_page_limit

    def check(self, pdf_bytes: bytes, password: str | None = None) -> PreCheckResult:
        """Probe a PDF.

        Returns:
            PreCheckResult; ``is_password_protected`` is set (and everything
            else zeroed) when the PDF cannot be opened with ``password``.

        Raises:
            PdfExtractionError: if the bytes are not a readable PDF.
        """
        try:
            document = self._backend.open(pdf_bytes, password)
        except PdfPasswordError as exc:
            Log.info(f"Pre-check: PDF is password protected ({exc.reason.value})")
            return PreCheckResult(is_password_protected=True)

        with document:
            page_count = document.page_count
            sample = "".join(
                document.raw_page_text(index)
                for index in range(min(self._sample_pages, page_count))
            )

        sample_length = len(sample.strip())
        result = PreCheckResult(
            page_count=page_count,
            is_scanned=sample_length < self._scanned_threshold,
            is_password_protected=False,
            sample_text_length=sample_length,
        )
        Log.info(
            f"Pre-check: {page_count} pages, {sample_length} sample chars, "
            f"scanned={result.is_scanned}"
        )
        return result

    def exceeds_ocr_limit(self, result: PreCheckResult) -> bool:
        """True when a scanned document would be truncated by the OCR page cap."""
        return result.is_scanned and result.exceeds_ocr_limit(self.ocr_page_hard_limit)
