import io

import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect
from PIL import Image

from doccompare.pdf.base import BasePdfBackend, BasePdfDocument
from doccompare.pdf.exceptions import (
    IncorrectPasswordError,
    PasswordRequiredError,
    PdfExtractionError,
)
from doccompare.pdf.models import TextRun


def _is_password_failure(exc: BaseException) -> bool:
    """pdfplumber may wrap pdfminer's password error; look through the chain."""
    seen: set[int] = set()
    pending: list[BaseException] = [exc]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, PDFPasswordIncorrect):
            return True
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
        for linked in (current.__cause__, current.__context__):
            if linked is not None:
                pending.append(linked)
    return False


class PdfPlumberDocument(BasePdfDocument):
    """PDF opened with pdfplumber; runs come from words that keep inner blanks."""

    def __init__(self, pdf: pdfplumber.PDF) -> None:
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def page_runs(self, index: int) -> list[TextRun]:
        try:
            page = self._pdf.pages[index]
            words = page.extract_words(keep_blank_chars=True)
        except Exception as exc:
            raise PdfExtractionError(
                f"pdfplumber failed to parse page {index + 1}: {exc}"
            ) from exc
        return [
            TextRun(
                text=word["text"],
                x=float(word["x0"]),
                y=float(page.height - word["bottom"]),
                width=float(word["x1"] - word["x0"]),
            )
            for word in words
        ]

    def render_page(self, index: int, dpi: int) -> Image.Image:
        try:
            image = self._pdf.pages[index].to_image(resolution=dpi).original
            return image.convert("RGB")
        except Exception as exc:
            raise PdfExtractionError(
                f"pdfplumber failed to render page {index + 1}: {exc}"
            ) from exc

    def close(self) -> None:
        self._pdf.close()


class PdfPlumberBackend(BasePdfBackend):
    """Opens PDFs using pdfplumber."""

    name = "pdfplumber"

    def open(self, pdf_bytes: bytes, password: str | None = None) -> BasePdfDocument:
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes), password=password or "")
        except Exception as exc:
            if _is_password_failure(exc):
                if not password:
                    raise PasswordRequiredError() from exc
                raise IncorrectPasswordError() from exc
            raise PdfExtractionError(f"pdfplumber could not open PDF: {exc}") from exc
        return PdfPlumberDocument(pdf)
