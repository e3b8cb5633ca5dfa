import pymupdf
from PIL import Image

from doccompare.pdf.base import BasePdfBackend, BasePdfDocument
from doccompare.pdf.exceptions import (
    IncorrectPasswordError,
    PasswordRequiredError,
    PdfExtractionError,
)
from doccompare.pdf.models import TextRun

_TEXT_BLOCK = 0


class PyMuPdfDocument(BasePdfDocument):
    """PDF opened with PyMuPDF; runs come from text spans."""

    def __init__(self, doc: pymupdf.Document) -> None:
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def page_runs(self, index: int) -> list[TextRun]:
        try:
            page = self._doc[index]
            height = page.rect.height
            data = page.get_text("dict")
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf failed to parse page {index + 1}: {exc}") from exc

        runs: list[TextRun] = []
        for block in data.get("blocks", []):
            if block.get("type") != _TEXT_BLOCK:
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    x0, _y0, x1, _y1 = span["bbox"]
                    origin_x, origin_y = span["origin"]
                    runs.append(
                        TextRun(
                            text=span["text"],
                            x=origin_x,
                            y=height - origin_y,
                            width=x1 - x0,
                        )
                    )
        return runs

    def render_page(self, index: int, dpi: int) -> Image.Image:
        try:
            pix = self._doc[index].get_pixmap(dpi=dpi, alpha=False)
            return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf failed to render page {index + 1}: {exc}") from exc

    def close(self) -> None:
        self._doc.close()


class PyMuPdfBackend(BasePdfBackend):
    """Opens PDFs using PyMuPDF."""

    name = "pymupdf"

    def open(self, pdf_bytes: bytes, password: str | None = None) -> BasePdfDocument:
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not open PDF: {exc}") from exc

        if doc.needs_pass:
            if not password:
                doc.close()
                raise PasswordRequiredError()
            if not doc.authenticate(password):
                doc.close()
                raise IncorrectPasswordError()
        return PyMuPdfDocument(doc)
