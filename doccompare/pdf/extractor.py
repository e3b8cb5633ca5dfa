import asyncio

from doccompare.logging.logger import Log
from doccompare.pdf.base import BasePdfBackend
from doccompare.pdf.layout import LayoutOptions, assemble_page
from doccompare.pdf.models import PdfExtractionResult
from doccompare.processor.progress import ProgressSpan


class PdfTextExtractor:
    """Recovers reading-order text from a PDF's embedded glyph runs.

    Each page is parsed off the event loop so the host can keep servicing
    progress updates between pages.
    """

    def __init__(
        self,
        backend: BasePdfBackend,
        *,
        layout: LayoutOptions | None = None,
        scanned_threshold: int = 100,
        page_limit: int = 1000,
    ) -> None:
        self._backend = backend
        self._layout = layout or LayoutOptions()
        self._scanned_threshold = scanned_threshold
        self._page_limit = page_limit

    async def extract(
        self,
        pdf_bytes: bytes,
        password: str | None = None,
        progress: ProgressSpan | None = None,
    ) -> PdfExtractionResult:
        """Extract text page by page.

        Only the first ``page_limit`` pages are read; ``page_count`` still
        reports the full document so an OCR fallback can apply its own cap.

        Raises:
            PasswordRequiredError: if the PDF is encrypted and no password was given.
            IncorrectPasswordError: if the password was rejected.
            PdfExtractionError: if the PDF is unreadable.
        """
        document = await asyncio.to_thread(self._backend.open, pdf_bytes, password)
        with document:
            page_count = document.page_count
            pages_to_read = min(page_count, self._page_limit)
            if pages_to_read < page_count:
                Log.warning(
                    f"PDF has {page_count} pages; reading text from the first {pages_to_read}"
                )
            if progress is not None:
                progress.update(0.0, "Loading PDF...")

            pages: list[str] = []
            for index in range(pages_to_read):
                runs = await asyncio.to_thread(document.page_runs, index)
                pages.append(assemble_page(runs, self._layout) + "\n")
                if progress is not None:
                    progress.update(
                        (index + 1) / pages_to_read,
                        f"Extracting page {index + 1}/{pages_to_read}...",
                    )

        text = "".join(pages).strip()
        is_scanned = page_count > 0 and len(text) < self._scanned_threshold
        Log.info(
            f"Extracted {len(text)} chars from {pages_to_read}/{page_count} PDF pages "
            f"with {self._backend.name} (scanned={is_scanned})"
        )
        return PdfExtractionResult(text=text, page_count=page_count, is_scanned=is_scanned)
