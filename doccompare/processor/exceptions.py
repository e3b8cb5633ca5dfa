class ProcessorError(Exception):
    """Base exception for all document processing errors."""


class UnsupportedFileTypeError(ProcessorError):
    """Raised when a file matches no known extension or MIME family."""


class ExtractionError(ProcessorError):
    """Raised when a document cannot be turned into text (corrupt or unreadable)."""


class ComparisonCancelledError(ProcessorError):
    """Raised when the user aborts a password prompt.

    Not an error from the user's point of view: hosts should end the run
    quietly instead of showing a failure.
    """
