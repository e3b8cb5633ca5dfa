from enum import Enum

from doccompare.processor.exceptions import ExtractionError


class PasswordFailure(str, Enum):
    """Why a PDF could not be opened with the given credential."""

    REQUIRED = "required"
    INCORRECT = "incorrect"


class PdfExtractionError(ExtractionError):
    """Raised when a PDF cannot be opened, parsed or rendered."""


class PdfPasswordError(PdfExtractionError):
    """Raised when a PDF is encrypted and the credential did not open it.

    Callers branch on ``reason`` rather than on the concrete subclass.
    """

    reason: PasswordFailure

    def __init__(self, message: str, reason: PasswordFailure) -> None:
        super().__init__(message)
        self.reason = reason


class PasswordRequiredError(PdfPasswordError):
    """Raised when a PDF needs a password and none was supplied."""

    def __init__(self, message: str = "PDF is password protected") -> None:
        super().__init__(message, PasswordFailure.REQUIRED)


class IncorrectPasswordError(PdfPasswordError):
    """Raised when the supplied password was rejected."""

    def __init__(self, message: str = "Incorrect PDF password") -> None:
        super().__init__(message, PasswordFailure.INCORRECT)
