from doccompare.processor.progress import ProgressReporter, format_eta


class TestProgressReporter:
    def test_forwards_updates(self) -> None:
        events: list[tuple[float, str]] = []
        reporter = ProgressReporter(lambda pct, msg: events.append((pct, msg)))

        reporter.report(10, "Loading PDF...")
        reporter.report(40, "Extracting page 1/2...")

        assert events == [(10, "Loading PDF..."), (40, "Extracting page 1/2...")]
        assert reporter.percent == 40

    def test_never_moves_backwards(self) -> None:
        events: list[float] = []
        reporter = ProgressReporter(lambda pct, _msg: events.append(pct))

        reporter.report(60, "a")
        reporter.report(20, "b")

        assert events == [60, 60]

    def test_clamps_to_range(self) -> None:
        reporter = ProgressReporter()
        reporter.report(-5, "low")
        assert reporter.percent == 0
        reporter.report(250, "high")
        assert reporter.percent == 100

    def test_works_without_callback(self) -> None:
        reporter = ProgressReporter()
        reporter.report(30, "quiet")
        assert reporter.percent == 30


class TestProgressSpan:
    def test_maps_fraction_onto_range(self) -> None:
        events: list[float] = []
        reporter = ProgressReporter(lambda pct, _msg: events.append(pct))
        span = reporter.span(50, 70)

        span.update(0.0, "start")
        span.update(0.5, "half")
        span.update(1.0, "done")

        assert events == [50, 60, 70]

    def test_clamps_fraction(self) -> None:
        reporter = ProgressReporter()
        reporter.span(10, 20).update(3.0, "over")
        assert reporter.percent == 20


class TestFormatEta:
    def test_seconds(self) -> None:
        assert format_eta(42) == "~42s remaining"

    def test_minutes(self) -> None:
        assert format_eta(125) == "~2m 05s remaining"

    def test_negative_is_zero(self) -> None:
        assert format_eta(-3) == "~0s remaining"
