from collections import defaultdict

import pytesseract
from PIL import Image
from pytesseract import Output

from doccompare.ocr.base import BaseOcrEngine, RecognitionProgress
from doccompare.ocr.exceptions import OcrError
from doccompare.ocr.models import OcrLine, OcrPage


class TesseractOcrEngine(BaseOcrEngine):
    """Recognizes text with Tesseract and groups words into lines.

    pytesseract runs the tesseract binary as one blocking subprocess call and
    exposes no intermediate progress, so ``on_progress`` only sees 0.0 when
    recognition starts and 1.0 when it finishes.
    """

    def __init__(self, language: str = "eng") -> None:
        self._language = language

    def recognize(
        self,
        image: Image.Image,
        on_progress: RecognitionProgress | None = None,
    ) -> OcrPage:
        _notify(on_progress, 0.0)
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        try:
            data = pytesseract.image_to_data(
                image, lang=self._language, output_type=Output.DICT
            )
        except pytesseract.TesseractNotFoundError as exc:
            raise OcrError("Tesseract binary not found; install tesseract-ocr") from exc
        except (pytesseract.TesseractError, RuntimeError) as exc:
            raise OcrError(f"Tesseract recognition failed: {exc}") from exc

        page = lines_from_data(data)
        _notify(on_progress, 1.0)
        return page


def lines_from_data(data: dict[str, list[object]]) -> OcrPage:
    """Build an OcrPage from ``image_to_data`` output.

    Words are grouped by (block, paragraph, line); a line's confidence is the
    mean of its words' confidences, the page confidence the mean over all words.
    """
    grouped: dict[tuple[int, int, int], list[tuple[str, float]]] = defaultdict(list)
    order: list[tuple[int, int, int]] = []
    all_confidences: list[float] = []

    for i, raw_text in enumerate(data.get("text", [])):
        text = str(raw_text).strip()
        confidence = float(str(data["conf"][i]))
        if not text or confidence < 0:
            continue
        key = (
            int(str(data["block_num"][i])),
            int(str(data["par_num"][i])),
            int(str(data["line_num"][i])),
        )
        if key not in grouped:
            order.append(key)
        grouped[key].append((text, confidence))
        all_confidences.append(confidence)

    lines = [
        OcrLine(
            text=" ".join(word for word, _ in grouped[key]),
            confidence=sum(conf for _, conf in grouped[key]) / len(grouped[key]),
        )
        for key in order
    ]
    page_confidence = sum(all_confidences) / len(all_confidences) if all_confidences else 0.0
    return OcrPage(lines=lines, confidence=page_confidence)


def _notify(callback: RecognitionProgress | None, fraction: float) -> None:
    if callback is not None:
        callback(fraction)
