import pytest
from pydantic import ValidationError

from doccompare.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pymupdf"

    def test_default_scanned_thresholds(self) -> None:
        s = Settings()
        assert s.scanned_text_threshold == 100
        assert s.precheck_scanned_threshold == 50
        assert s.precheck_sample_pages == 2

    def test_default_page_limits(self) -> None:
        s = Settings()
        assert s.ocr_page_hard_limit == 50
        assert s.text_pdf_page_limit == 1000

    def test_default_layout_thresholds(self) -> None:
        s = Settings()
        assert s.row_tolerance == 3.0
        assert s.column_gap_threshold == 15.0
        assert s.word_gap_threshold == 1.0

    def test_default_ocr_filter(self) -> None:
        s = Settings()
        assert s.ocr_min_confidence == 40.0
        assert s.ocr_min_alnum_ratio == 0.3
        assert s.ocr_short_line_max_length == 2
        assert s.ocr_short_line_min_confidence == 70.0


class TestSettingsFromEnv:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PDF_ENGINE", "pdfplumber")
        monkeypatch.setenv("OCR_PAGE_HARD_LIMIT", "10")
        s = Settings()
        assert s.pdf_engine == "pdfplumber"
        assert s.ocr_page_hard_limit == 10

    def test_rejects_non_numeric_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCR_RENDER_DPI", "high")
        with pytest.raises(ValidationError):
            Settings()
