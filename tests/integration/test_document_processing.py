"""Processor and session wired with real backends; OCR engine faked unless tesseract exists."""

import asyncio
import io
import shutil
from pathlib import Path

import pytest
from PIL import Image, ImageDraw, ImageFont

from doccompare.config.settings import Settings
from doccompare.main import main
from doccompare.ocr.pipeline import OcrPipeline
from doccompare.pdf.exceptions import PasswordRequiredError
from doccompare.processor.file_loader import FileLoader
from doccompare.processor.models import FileType, SourceFile
from doccompare.processor.processor import (
    DocumentProcessor,
    build_ocr_pipeline,
    build_processor,
)
from doccompare.session.models import DocumentInput
from doccompare.session.password_flow import PasswordAttempt, PasswordFlow
from doccompare.session.session import ComparisonSession
from tests.fakes import CONTRACT_LINES, FakeOcrEngine, ocr_page

requires_tesseract = pytest.mark.skipif(
    shutil.which("tesseract") is None, reason="tesseract binary not installed"
)


def _processor() -> DocumentProcessor:
    engine = FakeOcrEngine([ocr_page(("Hello PDF World", 91.0))])
    return build_processor(Settings(), ocr_pipeline=OcrPipeline(engine))


class TestProcessorIntegration:
    def test_text_pdf(self, contract_pdf_bytes: bytes) -> None:
        source = SourceFile(name="contract.pdf", data=contract_pdf_bytes)

        result = asyncio.run(_processor().extract(source))

        assert result.text.split("\n") == CONTRACT_LINES
        assert result.used_ocr is False
        assert result.page_count == 1

    def test_sparse_pdf_falls_back_to_ocr(self, sample_pdf_bytes: bytes) -> None:
        source = SourceFile(name="scan.pdf", data=sample_pdf_bytes)

        result = asyncio.run(_processor().extract(source))

        assert result.used_ocr is True
        assert result.text == "Hello PDF World"
        assert result.ocr_confidence == pytest.approx(91.0)

    def test_word_document(self, docx_bytes: bytes) -> None:
        source = SourceFile(name="report.docx", data=docx_bytes)

        result = asyncio.run(_processor().extract(source))

        assert result.file_type is FileType.WORD
        assert result.text.startswith("Quarterly report\nItem\tTotal")

    def test_encrypted_pdf_needs_password(self, encrypted_pdf_bytes: bytes) -> None:
        source = SourceFile(name="locked.pdf", data=encrypted_pdf_bytes)

        with pytest.raises(PasswordRequiredError):
            asyncio.run(_processor().extract(source))

        result = asyncio.run(_processor().extract(source, password="secret"))
        assert result.text.split("\n") == CONTRACT_LINES


class TestSessionIntegration:
    def test_pdf_against_word_and_reference_text(
        self, contract_pdf_bytes: bytes, docx_bytes: bytes
    ) -> None:
        session = ComparisonSession(_processor(), PasswordFlow())
        inputs = [
            DocumentInput.from_file(SourceFile(name="contract.pdf", data=contract_pdf_bytes)),
            DocumentInput.from_file(SourceFile(name="report.docx", data=docx_bytes)),
            DocumentInput.from_text("\n".join(CONTRACT_LINES).upper()),
        ]

        result = asyncio.run(session.run(inputs))

        word, reference = result.comparisons
        assert word.result.is_exact_match is False
        assert word.result.similarity < 10
        assert reference.result.is_exact_match is True
        assert reference.result.similarity == 100

    def test_password_prompt_unlocks_pdf(
        self, contract_pdf_bytes: bytes, encrypted_pdf_bytes: bytes
    ) -> None:
        prompts: list[PasswordAttempt] = []
        flow: PasswordFlow

        def on_prompt(attempt: PasswordAttempt) -> None:
            prompts.append(attempt)
            asyncio.get_running_loop().call_soon(flow.submit, "secret")

        flow = PasswordFlow(on_prompt=on_prompt)
        session = ComparisonSession(_processor(), flow)
        inputs = [
            DocumentInput.from_file(SourceFile(name="contract.pdf", data=contract_pdf_bytes)),
            DocumentInput.from_file(SourceFile(name="locked.pdf", data=encrypted_pdf_bytes)),
        ]

        result = asyncio.run(session.run(inputs))

        assert [p.label for p in prompts] == ["Document B"]
        assert result.comparisons[0].result.is_exact_match is True


class TestFileLoader:
    def test_loads_bytes_and_media_type(self, tmp_path: Path, sample_pdf_bytes: bytes) -> None:
        path = tmp_path / "sample.pdf"
        path.write_bytes(sample_pdf_bytes)

        source = FileLoader().load(path)

        assert source.name == "sample.pdf"
        assert source.data == sample_pdf_bytes
        assert source.media_type == "application/pdf"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="File not found"):
            FileLoader().load(tmp_path / "missing.pdf")

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FileLoader().load(tmp_path)


class TestCommandLine:
    def test_compares_files_on_disk(
        self,
        tmp_path: Path,
        contract_pdf_bytes: bytes,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = tmp_path / "contract.pdf"
        path.write_bytes(contract_pdf_bytes)

        code = main([str(path), "--text", "\n".join(CONTRACT_LINES)])

        assert code == 0
        out = capsys.readouterr().out
        assert "contract.pdf vs Reference text: 100% similar, exact match" in out

    def test_unsupported_file_fails(self, tmp_path: Path, sample_pdf_bytes: bytes) -> None:
        pdf = tmp_path / "a.pdf"
        pdf.write_bytes(sample_pdf_bytes)
        notes = tmp_path / "notes.txt"
        notes.write_text("plain text")

        assert main([str(pdf), str(notes)]) == 1


@requires_tesseract
class TestTesseractOcr:
    @staticmethod
    def _text_image() -> bytes:
        image = Image.new("RGB", (900, 160), "white")
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default(size=56)
        draw.text((20, 40), "INVOICE TOTAL 1250", fill="black", font=font)
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()

    def test_image_route(self) -> None:
        processor = build_processor(Settings())
        source = SourceFile(name="invoice.png", data=self._text_image())

        result = asyncio.run(processor.extract(source))

        assert result.used_ocr is True
        assert "1250" in result.text
        assert result.ocr_confidence is not None and result.ocr_confidence > 0

    def test_blank_image_yields_no_text(self, blank_png_bytes: bytes) -> None:
        result = asyncio.run(
            build_ocr_pipeline(Settings()).run_single(Image.open(io.BytesIO(blank_png_bytes)))
        )

        assert result.text == ""
        assert result.confidence == 0
