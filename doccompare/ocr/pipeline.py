"""Runs recognition over page images and keeps only plausible text.

Recognition is CPU bound, so every page runs in a worker thread and the
pipeline yields to the event loop every ``yield_every_pages`` pages. Engine
progress from the worker thread is marshalled back onto the loop before it
reaches the host callback.
"""

import asyncio
import time
from collections.abc import Callable, Iterable, Sequence

from PIL import Image

from doccompare.logging.logger import Log
from doccompare.ocr.base import BaseOcrEngine
from doccompare.ocr.models import OcrLine, OcrResult
from doccompare.ocr.noise_filter import OcrNoiseFilter
from doccompare.processor.progress import ProgressSpan, format_eta


class OcrPipeline:
    """Recognize, filter noise, join lines, average confidence."""

    def __init__(
        self,
        engine: BaseOcrEngine,
        noise_filter: OcrNoiseFilter | None = None,
        *,
        yield_every_pages: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._engine = engine
        self._noise_filter = noise_filter or OcrNoiseFilter()
        self._yield_every_pages = max(1, yield_every_pages)
        self._clock = clock

    async def run(
        self,
        images: Sequence[Image.Image],
        progress: ProgressSpan | None = None,
    ) -> OcrResult:
        """OCR a batch of page images.

        Pages whose lines were all filtered out do not count towards the
        mean confidence; with no surviving text the confidence is 0.
        """
        total = len(images)
        texts: list[str] = []
        confidences: list[float] = []
        started = self._clock()

        for index, image in enumerate(images):
            eta = self._eta(started, index, total)
            label = f"page {index + 1}/{total}"
            self._update(progress, index / total, f"Running OCR on {label}...{eta}")

            def page_message(fraction: float, label: str = label, eta: str = eta) -> str:
                return f"OCR: {label} ({round(fraction * 100)}%){eta}"

            lines = await self._recognize(image, progress, index, total, page_message)
            if lines:
                texts.append("\n".join(line.text for line in lines))
                confidences.append(_mean(line.confidence for line in lines))

            if (index + 1) % self._yield_every_pages == 0:
                await asyncio.sleep(0)

        self._update(progress, 1.0, "OCR complete")
        result = OcrResult(
            text="\n".join(texts).strip(),
            confidence=_mean(confidences),
        )
        Log.info(
            f"OCR finished: {len(confidences)}/{total} pages with text, "
            f"confidence {result.confidence:.1f}"
        )
        return result

    async def run_single(
        self,
        image: Image.Image,
        progress: ProgressSpan | None = None,
    ) -> OcrResult:
        """OCR a standalone image."""
        self._update(progress, 0.0, "Initializing OCR...")
        lines = await self._recognize(
            image, progress, 0, 1, lambda fraction: f"OCR progress: {round(fraction * 100)}%"
        )
        self._update(progress, 1.0, "OCR complete")
        result = OcrResult(
            text="\n".join(line.text for line in lines).strip(),
            confidence=_mean(line.confidence for line in lines),
        )
        Log.info(f"OCR finished: {len(lines)} lines, confidence {result.confidence:.1f}")
        return result

    async def _recognize(
        self,
        image: Image.Image,
        progress: ProgressSpan | None,
        index: int,
        total: int,
        message: Callable[[float], str],
    ) -> list[OcrLine]:
        loop = asyncio.get_running_loop()

        def on_engine_progress(fraction: float) -> None:
            loop.call_soon_threadsafe(
                self._update, progress, (index + fraction) / total, message(fraction)
            )

        page = await asyncio.to_thread(self._engine.recognize, image, on_engine_progress)
        kept = self._noise_filter.filter(page.lines)
        Log.debug(
            f"OCR page {index + 1}: kept {len(kept)}/{len(page.lines)} lines "
            f"(engine confidence {page.confidence:.1f})"
        )
        return kept

    def _eta(self, started: float, done: int, total: int) -> str:
        if done == 0:
            return ""
        elapsed = self._clock() - started
        return f" {format_eta(elapsed / done * (total - done))}"

    @staticmethod
    def _update(progress: ProgressSpan | None, fraction: float, message: str) -> None:
        if progress is not None:
            progress.update(fraction, message)


def _mean(values: Iterable[float]) -> float:
    items = list(values)
    return sum(items) / len(items) if items else 0.0
