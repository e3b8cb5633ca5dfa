from abc import ABC, abstractmethod


class BaseNormalizer(ABC):
    """Contract for text normalizers applied before comparison."""

    @abstractmethod
    def normalize(self, text: str) -> str:
        """Canonicalize raw extracted text.

        Args:
            text: Plain text as produced by an extractor or typed by the user.

        Returns:
            Canonical text. Implementations must be pure and idempotent.
        """
