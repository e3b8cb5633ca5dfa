from doccompare.processor.exceptions import ExtractionError


class WordExtractionError(ExtractionError):
    """Raised when a Word document cannot be read."""
