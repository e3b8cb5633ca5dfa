from doccompare.config.settings import Settings
from doccompare.pdf.base import BasePdfBackend
from doccompare.pdf.pdfplumber_adapter import PdfPlumberBackend
from doccompare.pdf.pymupdf_adapter import PyMuPdfBackend


class PdfBackendFactory:
    """Creates the correct PDF backend based on settings."""

    ADAPTERS: dict[str, type[BasePdfBackend]] = {
        "pdfplumber": PdfPlumberBackend,
        "pymupdf": PyMuPdfBackend,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfBackend:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
