from doccompare.config.settings import Settings
from doccompare.logging.logger import Log
from doccompare.ocr.noise_filter import OcrNoiseFilter
from doccompare.ocr.pipeline import OcrPipeline
from doccompare.ocr.tesseract_adapter import TesseractOcrEngine
from doccompare.pdf.exceptions import PdfPasswordError
from doccompare.pdf.extractor import PdfTextExtractor
from doccompare.pdf.factory import PdfBackendFactory
from doccompare.pdf.layout import LayoutOptions
from doccompare.pdf.precheck import PdfPreChecker
from doccompare.pdf.rasterizer import PdfRasterizer
from doccompare.processor.exceptions import ProcessorError
from doccompare.processor.file_types import detect_file_type
from doccompare.processor.models import DocumentExtractionResult, FileType, SourceFile
from doccompare.processor.pipeline import ExtractionContext, ExtractionStage, ExtractionStep
from doccompare.processor.progress import ProgressCallback, ProgressReporter
from doccompare.processor.steps import (
    ExtractPdfTextStep,
    ExtractWordStep,
    OcrFallbackStep,
    OcrImageStep,
)
from doccompare.word.extractor import WordExtractor


class DocumentProcessor:
    """Routes a document to its extraction steps and runs them in order.

    Routes: image -> OCR; Word -> Word extractor; PDF -> structural
    extraction, then OCR fallback when forced or when the text looks scanned.
    """

    def __init__(self, routes: dict[FileType, list[ExtractionStep]]) -> None:
        self._routes = routes

    async def extract(
        self,
        source: SourceFile,
        force_ocr: bool = False,
        on_progress: ProgressCallback | None = None,
        password: str | None = None,
    ) -> DocumentExtractionResult:
        """Extract comparable text from ``source``.

        Raises:
            UnsupportedFileTypeError: if the file type is not recognised.
            PasswordRequiredError: if an encrypted PDF needs a password.
            IncorrectPasswordError: if the supplied password was rejected.
            ExtractionError: if the document is corrupt or unreadable.
        """
        file_type = detect_file_type(source.name, source.media_type)
        steps = self._routes.get(file_type)
        if steps is None:
            raise ProcessorError(f"No extraction route configured for {file_type.value}")

        Log.info(f"Extracting {source.name} ({file_type.value}, {source.size_bytes} bytes)")
        context = ExtractionContext(
            source=source,
            file_type=file_type,
            progress=ProgressReporter(on_progress),
            force_ocr=force_ocr,
            password=password,
        )
        try:
            for step in steps:
                context = await step.run(context)
        except PdfPasswordError as exc:
            Log.info(f"{source.name} needs a password ({exc.reason.value})")
            raise
        except ProcessorError as exc:
            Log.error(f"Extraction failed for {source.name}: {exc}")
            raise

        context.advance(ExtractionStage.COMPLETE)
        context.progress.report(100, "OCR complete" if context.used_ocr else "Extraction complete")
        return DocumentExtractionResult(
            text=context.text,
            file_name=source.name,
            file_type=file_type,
            used_ocr=context.used_ocr,
            ocr_confidence=context.ocr_confidence,
            page_count=context.page_count,
        )


def build_ocr_pipeline(settings: Settings) -> OcrPipeline:
    """Build the Tesseract-backed OCR pipeline from settings."""
    noise_filter = OcrNoiseFilter(
        min_confidence=settings.ocr_min_confidence,
        min_alnum_ratio=settings.ocr_min_alnum_ratio,
        short_line_max_length=settings.ocr_short_line_max_length,
        short_line_min_confidence=settings.ocr_short_line_min_confidence,
    )
    return OcrPipeline(
        TesseractOcrEngine(language=settings.ocr_language),
        noise_filter,
        yield_every_pages=settings.ocr_yield_every_pages,
    )


def build_prechecker(settings: Settings) -> PdfPreChecker:
    """Build a PDF pre-checker using the configured backend."""
    return PdfPreChecker(
        PdfBackendFactory.create(settings),
        sample_pages=settings.precheck_sample_pages,
        scanned_threshold=settings.precheck_scanned_threshold,
        ocr_page_hard_limit=settings.ocr_page_hard_limit,
        text_pdf_page_limit=settings.text_pdf_page_limit,
    )


def build_processor(
    settings: Settings,
    ocr_pipeline: OcrPipeline | None = None,
) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters."""
    backend = PdfBackendFactory.create(settings)
    pdf_extractor = PdfTextExtractor(
        backend,
        layout=LayoutOptions(
            row_tolerance=settings.row_tolerance,
            column_gap_threshold=settings.column_gap_threshold,
            word_gap_threshold=settings.word_gap_threshold,
        ),
        scanned_threshold=settings.scanned_text_threshold,
        page_limit=settings.text_pdf_page_limit,
    )
    rasterizer = PdfRasterizer(
        backend,
        dpi=settings.ocr_render_dpi,
        page_limit=settings.ocr_page_hard_limit,
    )
    ocr_pipeline = ocr_pipeline or build_ocr_pipeline(settings)
    return DocumentProcessor(
        routes={
            FileType.PDF: [
                ExtractPdfTextStep(pdf_extractor),
                OcrFallbackStep(rasterizer, ocr_pipeline),
            ],
            FileType.WORD: [ExtractWordStep(WordExtractor())],
            FileType.IMAGE: [OcrImageStep(ocr_pipeline)],
        }
    )
