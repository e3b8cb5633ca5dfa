import asyncio

from PIL import Image

from doccompare.logging.logger import Log
from doccompare.pdf.base import BasePdfBackend
from doccompare.processor.progress import ProgressSpan


class PdfRasterizer:
    """Renders PDF pages to images for OCR, capped at ``page_limit`` pages."""

    def __init__(self, backend: BasePdfBackend, *, dpi: int = 150, page_limit: int = 50) -> None:
        self._backend = backend
        self._dpi = dpi
        self._page_limit = page_limit

    async def render(
        self,
        pdf_bytes: bytes,
        password: str | None = None,
        progress: ProgressSpan | None = None,
    ) -> list[Image.Image]:
        document = await asyncio.to_thread(self._backend.open, pdf_bytes, password)
        with document:
            total = document.page_count
            pages = min(total, self._page_limit)
            if total > pages:
                Log.warning(f"OCR limited to the first {pages} of {total} pages")

            images: list[Image.Image] = []
            for index in range(pages):
                if progress is not None:
                    progress.update(
                        index / pages, f"Converting page {index + 1}/{pages} to image..."
                    )
                images.append(await asyncio.to_thread(document.render_page, index, self._dpi))
            if progress is not None:
                progress.update(1.0, f"Rendered {pages} pages")
        return images
