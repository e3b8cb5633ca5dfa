"""Turns encrypted-PDF failures into user prompts and resumes extraction.

States: IDLE -> AWAITING_PASSWORD -> RESOLVED. A failed extraction suspends on
a future held by this object (paired with the document id) until the host
calls :meth:`PasswordFlow.submit` or :meth:`PasswordFlow.cancel`. Prompts are
serialized by a lock, so a second document waits instead of prompting at the
same time. Rejected passwords re-prompt without limit: verification is local.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from doccompare.logging.logger import Log
from doccompare.pdf.exceptions import PasswordFailure, PdfPasswordError
from doccompare.processor.exceptions import ComparisonCancelledError

T = TypeVar("T")


class PasswordFlowState(str, Enum):
    IDLE = "idle"
    AWAITING_PASSWORD = "awaiting_password"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class PasswordAttempt:
    """What the host needs to show a password prompt."""

    document_id: str
    file_name: str
    label: str
    last_error: PasswordFailure | None = None


PromptListener = Callable[[PasswordAttempt], None]


@dataclass
class _PendingPassword:
    attempt: PasswordAttempt
    future: "asyncio.Future[str]"


class PasswordFlow:
    """Password prompt state machine with a per-session password cache."""

    def __init__(self, on_prompt: PromptListener | None = None) -> None:
        self._on_prompt = on_prompt
        self._lock = asyncio.Lock()
        self._pending: _PendingPassword | None = None
        self._passwords: dict[str, str] = {}
        self.state = PasswordFlowState.IDLE

    @property
    def pending(self) -> PasswordAttempt | None:
        """The prompt currently awaiting the host, if any."""
        return self._pending.attempt if self._pending is not None else None

    def cached_password(self, document_id: str) -> str | None:
        return self._passwords.get(document_id)

    async def run(
        self,
        document_id: str,
        file_name: str,
        label: str,
        attempt: Callable[[str | None], Awaitable[T]],
    ) -> T:
        """Run ``attempt`` and, on a password failure, prompt and retry it.

        ``attempt`` receives the password to use (``None`` on the first try
        unless one is cached for the document).

        Raises:
            ComparisonCancelledError: if the host cancels the prompt.
        """
        try:
            return await attempt(self._passwords.get(document_id))
        except PdfPasswordError as exc:
            failure = exc.reason

        async with self._lock:
            try:
                return await self._resolve(document_id, file_name, label, attempt, failure)
            except BaseException:
                # Cancelled, or the retry failed for a non-password reason.
                self.state = PasswordFlowState.IDLE
                raise

    async def _resolve(
        self,
        document_id: str,
        file_name: str,
        label: str,
        attempt: Callable[[str | None], Awaitable[T]],
        failure: PasswordFailure,
    ) -> T:
        last_error = failure
        while True:
            password = await self._await_password(
                PasswordAttempt(document_id, file_name, label, last_error)
            )
            try:
                result = await attempt(password)
            except PdfPasswordError as exc:
                last_error = exc.reason
                if exc.reason is PasswordFailure.INCORRECT:
                    Log.info(f"Password rejected for {file_name}")
                continue

            self._passwords.setdefault(document_id, password)
            self.state = PasswordFlowState.RESOLVED
            Log.info(f"Password accepted for {file_name}")
            return result

    async def _await_password(self, attempt: PasswordAttempt) -> str:
        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        self._pending = _PendingPassword(attempt, future)
        self.state = PasswordFlowState.AWAITING_PASSWORD
        Log.info(f"Awaiting password for {attempt.label} ({attempt.file_name})")
        try:
            if self._on_prompt is not None:
                self._on_prompt(attempt)
            return await future
        finally:
            self._pending = None

    def submit(self, password: str) -> None:
        """Resume the suspended extraction with ``password``."""
        pending = self._require_pending()
        if not pending.future.done():
            pending.future.set_result(password)

    def cancel(self) -> None:
        """Abort the suspended extraction; the whole run fails as cancelled."""
        pending = self._require_pending()
        Log.info(f"Password entry cancelled for {pending.attempt.file_name}")
        if not pending.future.done():
            pending.future.set_exception(
                ComparisonCancelledError(
                    f"Password entry cancelled for {pending.attempt.file_name}"
                )
            )

    def _require_pending(self) -> _PendingPassword:
        if self._pending is None:
            raise RuntimeError("No password prompt is pending")
        return self._pending
