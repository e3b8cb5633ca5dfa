import argparse
import asyncio
import getpass
import sys

from doccompare.comparison.models import ComparisonResult
from doccompare.config.settings import Settings
from doccompare.logging.logger import Log
from doccompare.pdf.exceptions import PasswordFailure
from doccompare.processor.exceptions import ComparisonCancelledError, ProcessorError
from doccompare.processor.file_loader import FileLoader
from doccompare.processor.file_types import detect_file_type
from doccompare.processor.models import FileType, SourceFile
from doccompare.processor.processor import build_prechecker, build_processor
from doccompare.session.models import DocumentInput, SessionResult
from doccompare.session.password_flow import PasswordAttempt, PasswordFlow
from doccompare.session.session import ComparisonSession

EXIT_CANCELLED = 130


class ConsolePasswordPrompt:
    """Answers password prompts from the terminal; an empty entry cancels."""

    def __init__(self) -> None:
        self.flow = PasswordFlow(on_prompt=self._on_prompt)
        self._tasks: set[asyncio.Task[None]] = set()

    def _on_prompt(self, attempt: PasswordAttempt) -> None:
        task = asyncio.get_running_loop().create_task(self._ask(attempt))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _ask(self, attempt: PasswordAttempt) -> None:
        if attempt.last_error is PasswordFailure.INCORRECT:
            print("Incorrect password, please try again.", file=sys.stderr)
        try:
            password = await asyncio.to_thread(
                getpass.getpass,
                f"{attempt.label} ({attempt.file_name}) is password protected. "
                "Password (empty to cancel): ",
            )
        except EOFError:
            password = ""
        if password:
            self.flow.submit(password)
        else:
            self.flow.cancel()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="doccompare",
        description="Compare the text of PDF, Word and image documents on this machine.",
    )
    parser.add_argument("files", nargs="+", help="Documents to compare; the first is the baseline")
    parser.add_argument("--text", help="Reference text to compare against the baseline")
    parser.add_argument("--force-ocr", action="store_true", help="OCR PDFs even if they have text")
    parser.add_argument("--show-diff", action="store_true", help="Print the word-level diff")
    return parser.parse_args(argv)


async def _warn_about_ocr_cost(sources: list[SourceFile], settings: Settings) -> None:
    prechecker = build_prechecker(settings)
    for source in sources:
        if detect_file_type(source.name, source.media_type) is not FileType.PDF:
            continue
        check = await asyncio.to_thread(prechecker.check, source.data)
        if prechecker.exceeds_ocr_limit(check):
            Log.warning(
                f"{source.name} looks scanned and has {check.page_count} pages; "
                f"only the first {prechecker.ocr_page_hard_limit} will be processed"
            )
        elif check.is_scanned:
            Log.warning(f"{source.name} looks scanned; OCR of {check.page_count} pages may be slow")


async def _run(args: argparse.Namespace, settings: Settings) -> SessionResult:
    loader = FileLoader()
    sources = [loader.load(path) for path in args.files]
    await _warn_about_ocr_cost(sources, settings)

    inputs = [DocumentInput.from_file(source) for source in sources]
    if args.text is not None:
        inputs.append(DocumentInput.from_text(args.text))

    prompt = ConsolePasswordPrompt()
    session = ComparisonSession(
        build_processor(settings),
        prompt.flow,
        force_ocr=args.force_ocr,
    )
    return await session.run(
        inputs,
        on_progress=lambda label, percent, message: Log.debug(
            f"{label}: {percent:.0f}% {message}"
        ),
    )


def render_diff(result: ComparisonResult) -> str:
    """Inline diff with ``[-removed-]`` and ``{+added+}`` markers."""
    parts = []
    for change in result.differences:
        if change.added:
            parts.append(f"{{+{change.value}+}}")
        elif change.removed:
            parts.append(f"[-{change.value}-]")
        else:
            parts.append(change.value)
    return "".join(parts)


def _print_result(result: SessionResult, show_diff: bool) -> None:
    for document in result.documents:
        ocr = f", OCR confidence {document.ocr_confidence:.0f}%" if document.used_ocr else ""
        print(f"{document.file_name}: {document.file_type.value}{ocr}")
    for pair in result.comparisons:
        comparison = pair.result
        verdict = "exact match" if comparison.is_exact_match else "differs"
        print(
            f"{pair.baseline} vs {pair.other}: {comparison.similarity}% similar, {verdict} "
            f"(+{comparison.added_count} -{comparison.removed_count} "
            f"={comparison.unchanged_count} words)"
        )
        if show_diff and not comparison.is_exact_match:
            print(render_diff(comparison))


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> logging -> session -> summary."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        result = asyncio.run(_run(args, settings))
    except ComparisonCancelledError:
        print("Comparison cancelled.", file=sys.stderr)
        return EXIT_CANCELLED
    except (ProcessorError, FileNotFoundError, ValueError) as exc:
        Log.error(f"Comparison failed: {exc}")
        return 1

    _print_result(result, args.show_diff)
    return 0


if __name__ == "__main__":
    sys.exit(main())
