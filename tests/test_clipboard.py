from __future__ import annotations

import sys
from pathlib import Path

import pyperclip
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammr import clipboard
from grammr.clipboard import CallbackSink, ClipboardError, ClipboardSink, NullSink


def test_clipboard_sink_copies_and_pastes(monkeypatch: pytest.MonkeyPatch) -> None:
    store: list[str] = []
    monkeypatch.setattr(clipboard.pyperclip, "copy", store.append)
    monkeypatch.setattr(clipboard.pyperclip, "paste", lambda: "pasted text")
    sink = ClipboardSink()

    sink.commit("final text")

    assert store == ["final text"]
    assert sink.read() == "pasted text"


def test_clipboard_failures_become_clipboard_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(*_args: object) -> None:
        raise pyperclip.PyperclipException("no clipboard mechanism")

    monkeypatch.setattr(clipboard.pyperclip, "copy", broken)
    monkeypatch.setattr(clipboard.pyperclip, "paste", broken)
    sink = ClipboardSink()

    with pytest.raises(ClipboardError, match="Failed to copy"):
        sink.commit("text")
    with pytest.raises(ClipboardError, match="Failed to read"):
        sink.read()


def test_callback_and_null_sinks() -> None:
    received: list[str] = []
    CallbackSink(received.append).commit("one")
    null_sink = NullSink()
    null_sink.commit("two")

    assert received == ["one"]
    assert null_sink.committed == ["two"]
