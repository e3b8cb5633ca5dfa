"""Compares two texts word by word and scores their similarity."""

from doccompare.comparison.differ import count_words, diff_words
from doccompare.comparison.models import Change, ComparisonResult
from doccompare.logging.logger import Log
from doccompare.normalization.base import BaseNormalizer
from doccompare.normalization.normalizer import TextNormalizer


def similarity_score(added: int, removed: int, unchanged: int) -> int:
    """Percentage of retained words, penalized by the larger side of the edit.

    ``round(100 * unchanged / (unchanged + max(added, removed)))``, or 100 when
    there are no words at all. Only the larger side of the edit counts: a
    large deletion costs as much as an equally large insertion, and the
    smaller side is ignored. This is not a Jaccard measure; scores are part
    of the output, so keep the formula as it is.
    """
    if unchanged + added + removed == 0:
        return 100
    denominator = unchanged + max(added, removed)
    # Rounds half up, unlike the built-in round().
    return int(unchanged / denominator * 100 + 0.5)


class TextComparator:
    """Normalizes both inputs and builds a :class:`ComparisonResult`."""

    def __init__(self, normalizer: BaseNormalizer | None = None) -> None:
        self._normalizer = normalizer if normalizer is not None else TextNormalizer()

    def compare(self, text_a: str, text_b: str) -> ComparisonResult:
        normalized_a = self._normalizer.normalize(text_a)
        normalized_b = self._normalizer.normalize(text_b)

        if normalized_a == normalized_b:
            differences = [Change(normalized_a)] if normalized_a else []
        else:
            differences = diff_words(normalized_a, normalized_b)

        added = removed = unchanged = 0
        for change in differences:
            words = count_words(change.value)
            if change.added:
                added += words
            elif change.removed:
                removed += words
            else:
                unchanged += words

        result = ComparisonResult(
            is_exact_match=normalized_a == normalized_b,
            similarity=similarity_score(added, removed, unchanged),
            differences=differences,
            added_count=added,
            removed_count=removed,
            unchanged_count=unchanged,
            document_a_text=normalized_a,
            document_b_text=normalized_b,
        )
        Log.debug(
            f"Compared texts: similarity={result.similarity}% "
            f"+{added} -{removed} ={unchanged}"
        )
        return result


_default = TextComparator()


def compare(text_a: str, text_b: str) -> ComparisonResult:
    """Compare two texts with the default normalizer."""
    return _default.compare(text_a, text_b)
