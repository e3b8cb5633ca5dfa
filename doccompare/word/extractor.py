import io
from collections.abc import Iterator

import docx
from docx.document import Document as DocxDocument
from docx.table import Table
from docx.text.paragraph import Paragraph

from doccompare.word.exceptions import WordExtractionError


class WordExtractor:
    """Extracts plain text from .docx files, paragraphs and tables in order."""

    def extract(self, docx_bytes: bytes) -> str:
        """Return the document text.

        Table cells are separated by tabs and rows by newlines, matching the
        shape of tables reconstructed from PDFs.

        Raises:
            WordExtractionError: if the bytes are not a readable .docx file.
        """
        try:
            document = docx.Document(io.BytesIO(docx_bytes))
        except Exception as exc:
            raise WordExtractionError(f"Could not read Word document: {exc}") from exc
        return "\n".join(self._iter_blocks(document)).strip()

    def _iter_blocks(self, document: DocxDocument) -> Iterator[str]:
        for block in document.iter_inner_content():
            if isinstance(block, Paragraph):
                yield block.text
            elif isinstance(block, Table):
                yield from self._table_rows(block)

    @staticmethod
    def _table_rows(table: Table) -> Iterator[str]:
        for row in table.rows:
            cells: list[str] = []
            previous = None
            for cell in row.cells:
                # Merged cells repeat the same underlying element across the span.
                if previous is not None and cell._tc is previous._tc:
                    continue
                cells.append(cell.text.strip())
                previous = cell
            yield "\t".join(cells)
