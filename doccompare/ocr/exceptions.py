from doccompare.processor.exceptions import ExtractionError


class OcrError(ExtractionError):
    """Raised when text recognition fails or an image cannot be decoded."""
