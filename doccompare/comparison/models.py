from dataclasses import dataclass, field


@dataclass(frozen=True)
class Change:
    """One contiguous run of the edit script.

    At most one of ``added``/``removed`` is set; neither means unchanged.
    """

    value: str
    added: bool = False
    removed: bool = False

    def __post_init__(self) -> None:
        if self.added and self.removed:
            raise ValueError("A change cannot be both added and removed")

    @property
    def unchanged(self) -> bool:
        return not (self.added or self.removed)


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing two normalized texts."""

    is_exact_match: bool
    similarity: int
    differences: list[Change] = field(default_factory=list)
    added_count: int = 0
    removed_count: int = 0
    unchanged_count: int = 0
    document_a_text: str = ""
    document_b_text: str = ""

    @property
    def changes(self) -> list[Change]:
        """Only the added and removed runs."""
        return [c for c in self.differences if not c.unchanged]
