import pytest

from doccompare.normalization import TextNormalizer, normalize

SAMPLES = [
    "",
    "Hello World",
    "  Leading and trailing  ",
    "Line one\r\nLine two\rLine three",
    "Name\t\t\tAmount\nWidget\t150",
    "Para one\n\n\n\n\nPara two",
    "Punctuation: (a), [b]; {c}! \"quoted\" \u2014 dashes_and_underscores",
    "ÉCOLE Ünïcödé İstanbul straße",
    "a \n \n \n b",
    " non breaking separator\x0bvertical",
    "\U0001d400\U0001d401\U0001d402 Report",
]


class TestNormalizeSteps:
    def test_unifies_line_endings(self) -> None:
        assert normalize("a\r\nb\rc") == "a\nb\nc"

    def test_tabs_become_single_space(self) -> None:
        assert normalize("Name\t\t\tAmount") == "name amount"

    def test_punctuation_replaced_by_space(self) -> None:
        assert normalize("Hello, world! (test)") == "hello world test"

    def test_underscore_is_punctuation(self) -> None:
        assert normalize("snake_case") == "snake case"

    def test_collapses_space_runs(self) -> None:
        assert normalize("too     many   spaces") == "too many spaces"

    def test_collapses_newline_runs_to_two(self) -> None:
        assert normalize("a\n\n\n\n\nb") == "a\n\nb"

    def test_keeps_double_newline(self) -> None:
        assert normalize("a\n\nb") == "a\n\nb"

    def test_lower_cases(self) -> None:
        assert normalize("MiXeD CaSe") == "mixed case"

    def test_trims(self) -> None:
        assert normalize("  \n padded \n  ") == "padded"

    def test_keeps_unicode_letters_and_digits(self) -> None:
        assert normalize("Straße 42, Zürich") == "straße 42 zürich"

    def test_folds_letters_without_lowercase_mapping(self) -> None:
        assert normalize("\U0001d400\U0001d401\U0001d402 Report") == "abc report"

    def test_empty_string(self) -> None:
        assert normalize("") == ""

    def test_punctuation_only_becomes_empty(self) -> None:
        assert normalize("--- *** ---") == ""


class TestNormalizeProperties:
    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text: str) -> None:
        once = normalize(text)
        assert normalize(once) == once

    @pytest.mark.parametrize("text", SAMPLES)
    def test_no_tabs_newline_runs_or_uppercase(self, text: str) -> None:
        result = normalize(text)
        assert "\t" not in result
        assert "\n\n\n" not in result
        assert not any(ch.isupper() for ch in result)

    def test_instance_matches_module_function(self) -> None:
        text = "Some TEXT,\twith\r\nnoise"
        assert TextNormalizer().normalize(text) == normalize(text)
