"""Clipboard access and commit sinks for reviewed text."""

from __future__ import annotations

import logging
from typing import Callable

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardError(RuntimeError):
    """Raised when the system clipboard cannot be read or written."""


class ClipboardSink:
    """Commit sink backed by the system clipboard."""

    def commit(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Failed to copy to clipboard: {exc}") from exc
        logger.debug("Copied %d characters to the clipboard", len(text))

    def read(self) -> str:
        try:
            return pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Failed to read clipboard: {exc}") from exc


class CallbackSink:
    """Commit sink that forwards the final text to a callable."""

    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def commit(self, text: str) -> None:
        self._callback(text)


class NullSink:
    """Commit sink that keeps the last committed text and does nothing else."""

    def __init__(self) -> None:
        self.committed: list[str] = []

    def commit(self, text: str) -> None:
        self.committed.append(text)
