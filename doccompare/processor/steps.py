import asyncio
import io

from PIL import Image, UnidentifiedImageError

from doccompare.logging.logger import Log
from doccompare.ocr.exceptions import OcrError
from doccompare.ocr.pipeline import OcrPipeline
from doccompare.pdf.extractor import PdfTextExtractor
from doccompare.pdf.rasterizer import PdfRasterizer
from doccompare.processor.pipeline import ExtractionContext, ExtractionStage, ExtractionStep
from doccompare.word.extractor import WordExtractor


class ExtractWordStep(ExtractionStep):
    def __init__(self, word_extractor: WordExtractor) -> None:
        self._word_extractor = word_extractor

    async def run(self, context: ExtractionContext) -> ExtractionContext:
        context.progress.report(10, "Reading Word document...")
        data = context.source.data
        context.progress.report(30, "Extracting text...")
        context.text = await asyncio.to_thread(self._word_extractor.extract, data)
        context.advance(ExtractionStage.STRUCTURAL_EXTRACTION_DONE)
        Log.info(f"Extracted {len(context.text)} chars from Word document {context.source.name}")
        return context


class ExtractPdfTextStep(ExtractionStep):
    def __init__(self, pdf_extractor: PdfTextExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    async def run(self, context: ExtractionContext) -> ExtractionContext:
        context.progress.report(0, "Processing PDF...")
        result = await self._pdf_extractor.extract(
            context.source.data,
            password=context.password,
            progress=context.progress.span(10, 50),
        )
        context.text = result.text
        context.page_count = result.page_count
        context.is_scanned = result.is_scanned
        context.advance(ExtractionStage.STRUCTURAL_EXTRACTION_DONE)
        return context


class OcrFallbackStep(ExtractionStep):
    """Replaces structural PDF text with OCR output when forced or scanned."""

    def __init__(self, rasterizer: PdfRasterizer, ocr_pipeline: OcrPipeline) -> None:
        self._rasterizer = rasterizer
        self._ocr_pipeline = ocr_pipeline

    async def run(self, context: ExtractionContext) -> ExtractionContext:
        if context.stage is not ExtractionStage.STRUCTURAL_EXTRACTION_DONE:
            raise ValueError("Structural extraction must finish before the OCR fallback")
        if not (context.force_ocr or context.is_scanned):
            return context

        if context.force_ocr:
            Log.info(f"OCR forced for {context.source.name}")
            context.progress.report(50, "Starting OCR...")
        else:
            Log.warning(
                f"{context.source.name} looks scanned "
                f"({len(context.text)} chars of text); falling back to OCR"
            )
            context.progress.report(50, "PDF appears to be scanned. Starting OCR...")

        images = await self._rasterizer.render(
            context.source.data,
            password=context.password,
            progress=context.progress.span(50, 70),
        )
        result = await self._ocr_pipeline.run(images, progress=context.progress.span(70, 95))
        context.text = result.text
        context.used_ocr = True
        context.ocr_confidence = result.confidence
        context.advance(ExtractionStage.OCR_FALLBACK)
        return context


class OcrImageStep(ExtractionStep):
    def __init__(self, ocr_pipeline: OcrPipeline) -> None:
        self._ocr_pipeline = ocr_pipeline

    async def run(self, context: ExtractionContext) -> ExtractionContext:
        context.progress.report(0, "Processing image...")
        image = await asyncio.to_thread(_decode_image, context.source.data)
        result = await self._ocr_pipeline.run_single(image, progress=context.progress.span(10, 95))
        context.text = result.text
        context.used_ocr = True
        context.ocr_confidence = result.confidence
        context.advance(ExtractionStage.OCR_FALLBACK)
        return context


def _decode_image(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise OcrError(f"Could not decode image: {exc}") from exc
    return image
