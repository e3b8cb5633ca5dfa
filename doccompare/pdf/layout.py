"""Rebuilds reading-order text from positioned glyph runs.

Runs are grouped into rows by baseline (within a tolerance), rows are ordered
top to bottom, runs left to right. The horizontal gap between neighbouring
runs decides the separator: a wide gap is a table column (tab), a small gap a
word break (space), and touching runs belong to the same word.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from doccompare.pdf.models import TextRun


@dataclass(frozen=True)
class LayoutOptions:
    """Geometry thresholds, in PDF points."""

    row_tolerance: float = 3.0
    column_gap_threshold: float = 15.0
    word_gap_threshold: float = 1.0


def group_rows(runs: Iterable[TextRun], row_tolerance: float) -> list[list[TextRun]]:
    """Group runs into rows, top row first, each row sorted by x."""
    ordered = sorted((r for r in runs if r.text), key=lambda r: (-r.y, r.x))
    rows: list[list[TextRun]] = []
    row_y = 0.0
    for run in ordered:
        if rows and abs(row_y - run.y) <= row_tolerance:
            rows[-1].append(run)
        else:
            rows.append([run])
            row_y = run.y
    return [sorted(row, key=lambda r: r.x) for row in rows]


def join_row(row: list[TextRun], options: LayoutOptions) -> str:
    """Concatenate one row's runs, inserting tabs/spaces by gap width."""
    parts: list[str] = []
    previous: TextRun | None = None
    for run in row:
        if previous is not None:
            parts.append(_separator(run.x - previous.right, options))
        parts.append(run.text)
        previous = run
    return "".join(parts)


def _separator(gap: float, options: LayoutOptions) -> str:
    if gap > options.column_gap_threshold:
        return "\t"
    if gap > options.word_gap_threshold:
        return " "
    return ""


def assemble_page(runs: Iterable[TextRun], options: LayoutOptions | None = None) -> str:
    """Return the page text: rows joined by newlines."""
    options = options or LayoutOptions()
    rows = group_rows(runs, options.row_tolerance)
    return "\n".join(join_row(row, options) for row in rows)
