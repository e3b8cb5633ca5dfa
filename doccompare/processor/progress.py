from collections.abc import Callable

ProgressCallback = Callable[[float, str], None]


class ProgressReporter:
    """Forwards (percent, message) updates to an optional host callback.

    Percentages are clamped to 0..100 and never move backwards, so retries
    after a password prompt resume from the last reported value.
    """

    def __init__(self, callback: ProgressCallback | None = None) -> None:
        self._callback = callback
        self._percent = 0.0

    @property
    def percent(self) -> float:
        return self._percent

    def report(self, percent: float, message: str) -> None:
        self._percent = max(self._percent, min(100.0, max(0.0, percent)))
        if self._callback is not None:
            self._callback(self._percent, message)

    def span(self, start: float, end: float) -> "ProgressSpan":
        """A sub-range of the bar fed with 0..1 fractions."""
        return ProgressSpan(self, start, end)


class ProgressSpan:
    """Maps fractional progress of one stage onto ``start..end`` percent."""

    def __init__(self, reporter: ProgressReporter, start: float, end: float) -> None:
        self._reporter = reporter
        self.start = start
        self.end = end

    def update(self, fraction: float, message: str) -> None:
        fraction = min(1.0, max(0.0, fraction))
        self._reporter.report(self.start + fraction * (self.end - self.start), message)


def format_eta(seconds: float) -> str:
    """Human readable remaining time, e.g. ``~2m 05s remaining``."""
    seconds = max(0, int(round(seconds)))
    minutes, secs = divmod(seconds, 60)
    if minutes:
        return f"~{minutes}m {secs:02d}s remaining"
    return f"~{secs}s remaining"
