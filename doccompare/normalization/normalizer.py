"""Canonicalizes extracted text so formatting artifacts do not show up as changes.

Processing flow (order matters, later steps assume canonical newlines):
1. Unify line endings to ``\\n``.
2. Collapse tab runs to a single space (reconstructed table columns).
3. Replace every character that is not a letter, digit or whitespace with a space.
4. Collapse runs of horizontal whitespace to one space.
5. Collapse 3+ consecutive newlines to exactly two.
6. Lower-case. Uppercase letters without a lowercase mapping, such as the
   mathematical alphanumerics (``"𝐀"``), fall back to their NFKC
   compatibility form (``"a"``); the few that still have no lowercase form
   are kept as they are.
7. Trim.
"""

import re
import unicodedata
from typing import ClassVar

from doccompare.normalization.base import BaseNormalizer

# Letters (including combining marks) and numbers survive punctuation stripping.
_KEPT_CATEGORIES = frozenset({"L", "M", "N"})


class TextNormalizer(BaseNormalizer):
    """Deterministic normalizer: whitespace, punctuation and case insensitive."""

    _LINE_ENDING_RE: ClassVar[re.Pattern[str]] = re.compile(r"\r\n?")
    _TAB_RUN_RE: ClassVar[re.Pattern[str]] = re.compile(r"\t+")
    _SPACE_RUN_RE: ClassVar[re.Pattern[str]] = re.compile(r"[^\S\n]+")
    _NEWLINE_RUN_RE: ClassVar[re.Pattern[str]] = re.compile(r"\n{3,}")

    def normalize(self, text: str) -> str:
        text = self._LINE_ENDING_RE.sub("\n", text)
        text = self._TAB_RUN_RE.sub(" ", text)
        text = self._strip_punctuation(text)
        text = self._SPACE_RUN_RE.sub(" ", text)
        text = self._NEWLINE_RUN_RE.sub("\n\n", text)
        text = self._lower(text)
        return text.strip()

    @staticmethod
    def _lower(text: str) -> str:
        text = text.lower()
        if not any(ch.isupper() for ch in text):
            return text
        return "".join(_fold_uppercase(ch) if ch.isupper() else ch for ch in text)

    @staticmethod
    def _strip_punctuation(text: str) -> str:
        return "".join(
            ch if ch.isspace() or unicodedata.category(ch)[0] in _KEPT_CATEGORIES else " "
            for ch in text
        )


def _fold_uppercase(ch: str) -> str:
    folded = unicodedata.normalize("NFKC", ch).lower()
    return folded if folded.isalnum() and not folded.isupper() else ch


_default = TextNormalizer()


def normalize(text: str) -> str:
    """Normalize ``text`` with the default :class:`TextNormalizer`."""
    return _default.normalize(text)
