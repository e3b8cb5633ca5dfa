from abc import ABC, abstractmethod
from types import TracebackType

from PIL import Image

from doccompare.pdf.models import TextRun


class BasePdfDocument(ABC):
    """An opened (and, if needed, unlocked) PDF."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""

    @abstractmethod
    def page_runs(self, index: int) -> list[TextRun]:
        """Positioned text runs of the zero-based page ``index``.

        Raises:
            PdfExtractionError: if the page cannot be parsed.
        """

    @abstractmethod
    def render_page(self, index: int, dpi: int) -> Image.Image:
        """Rasterize page ``index`` to an RGB image at ``dpi``.

        Raises:
            PdfExtractionError: if the page cannot be rendered.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the underlying parser resources."""

    def raw_page_text(self, index: int) -> str:
        """Glyph text of a page concatenated without any layout."""
        return "".join(run.text for run in self.page_runs(index))

    def __enter__(self) -> "BasePdfDocument":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class BasePdfBackend(ABC):
    """Contract for all PDF parsing adapters."""

    name: str = ""

    @abstractmethod
    def open(self, pdf_bytes: bytes, password: str | None = None) -> BasePdfDocument:
        """Open PDF bytes, unlocking them with ``password`` when encrypted.

        Args:
            pdf_bytes: Raw PDF file content.
            password: Optional user password.

        Returns:
            An open document; use it as a context manager.

        Raises:
            PasswordRequiredError: if the PDF is encrypted and no password was given.
            IncorrectPasswordError: if the given password was rejected.
            PdfExtractionError: if the bytes are not a readable PDF.
        """
