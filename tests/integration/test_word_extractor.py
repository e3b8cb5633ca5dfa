import pytest

from doccompare.word.exceptions import WordExtractionError
from doccompare.word.extractor import WordExtractor


class TestWordExtractor:
    def test_paragraphs_and_table_rows_in_order(self, docx_bytes: bytes) -> None:
        text = WordExtractor().extract(docx_bytes)

        assert text == "Quarterly report\nItem\tTotal\nWidgets\t42\nEnd of report"

    def test_invalid_bytes_raise(self) -> None:
        with pytest.raises(WordExtractionError, match="Could not read Word document"):
            WordExtractor().extract(b"not a docx")
