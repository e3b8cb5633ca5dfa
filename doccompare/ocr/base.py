from abc import ABC, abstractmethod
from collections.abc import Callable

from PIL import Image

from doccompare.ocr.models import OcrPage

RecognitionProgress = Callable[[float], None]


class BaseOcrEngine(ABC):
    """Contract for text recognition adapters."""

    @abstractmethod
    def recognize(
        self,
        image: Image.Image,
        on_progress: RecognitionProgress | None = None,
    ) -> OcrPage:
        """Recognize text lines in a single image.

        Args:
            image: Page or photo to recognize.
            on_progress: Optional callback receiving 0..1 recognition progress.

        Returns:
            OcrPage with every recognized line, unfiltered.

        Raises:
            OcrError: if the engine fails.
        """
