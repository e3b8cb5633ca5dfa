"""Minimal word-granularity edit script.

Words are aligned with rapidfuzz's Indel edit script (insert/delete only), so
the unchanged words form a longest common subsequence of the two word lists.
Whitespace never takes part in that alignment; it is diffed separately in the
gaps between aligned words, where it cannot displace a word match.
"""

import re

from rapidfuzz.distance import Indel

from doccompare.comparison.models import Change

# Words and whitespace runs are separate tokens so the script rebuilds both texts exactly.
_TOKEN_RE = re.compile(r"\s+|\S+")


def tokenize(text: str) -> list[str]:
    """Split text into alternating word and whitespace tokens."""
    return _TOKEN_RE.findall(text)


def diff_words(old: str, new: str) -> list[Change]:
    """Compute the ordered list of changes turning ``old`` into ``new``.

    Concatenating the values of non-removed changes yields ``new``; concatenating
    the values of non-added changes yields ``old``. Between two unchanged runs,
    removed text comes before added text.
    """
    old_tokens = tokenize(old)
    new_tokens = tokenize(new)
    script = _EditScript()

    prev_old = prev_new = 0
    for old_index, new_index in _aligned_words(old_tokens, new_tokens):
        script.diff(old_tokens[prev_old:old_index], new_tokens[prev_new:new_index])
        script.equal(old_tokens[old_index])
        prev_old, prev_new = old_index + 1, new_index + 1
    script.diff(old_tokens[prev_old:], new_tokens[prev_new:])
    return script.finish()


def _aligned_words(old_tokens: list[str], new_tokens: list[str]) -> list[tuple[int, int]]:
    """Token index pairs of the words in a longest common word subsequence."""
    old_words = [i for i, token in enumerate(old_tokens) if not token.isspace()]
    new_words = [i for i, token in enumerate(new_tokens) if not token.isspace()]
    pairs: list[tuple[int, int]] = []
    for tag, i1, i2, j1, _j2 in Indel.opcodes(
        [old_tokens[i] for i in old_words],
        [new_tokens[j] for j in new_words],
    ):
        if tag == "equal":
            pairs.extend(
                (old_words[i1 + k], new_words[j1 + k]) for k in range(i2 - i1)
            )
    return pairs


class _EditScript:
    """Accumulates changes, merging neighbours of the same kind."""

    def __init__(self) -> None:
        self._changes: list[Change] = []
        self._removed: list[str] = []
        self._added: list[str] = []

    def equal(self, value: str) -> None:
        self._flush()
        self._append(Change(value))

    def diff(self, old_tokens: list[str], new_tokens: list[str]) -> None:
        if old_tokens == new_tokens:
            self.equal("".join(old_tokens))
            return
        # Only whitespace can match between two aligned words.
        for tag, i1, i2, j1, j2 in Indel.opcodes(old_tokens, new_tokens):
            if tag == "equal":
                self.equal("".join(old_tokens[i1:i2]))
                continue
            if tag in ("delete", "replace"):
                self._removed.extend(old_tokens[i1:i2])
            if tag in ("insert", "replace"):
                self._added.extend(new_tokens[j1:j2])

    def finish(self) -> list[Change]:
        self._flush()
        return self._changes

    def _flush(self) -> None:
        self._append(Change("".join(self._removed), removed=True))
        self._append(Change("".join(self._added), added=True))
        self._removed.clear()
        self._added.clear()

    def _append(self, change: Change) -> None:
        if not change.value:
            return
        if self._changes:
            last = self._changes[-1]
            if last.added == change.added and last.removed == change.removed:
                self._changes[-1] = Change(last.value + change.value, last.added, last.removed)
                return
        self._changes.append(change)


def count_words(text: str) -> int:
    """Number of whitespace-delimited, non-empty tokens in ``text``."""
    return len(text.split())
