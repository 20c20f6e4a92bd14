"""End-to-end tests for the grammr command line, without network or clipboard."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammr import cli
from grammr.clipboard import NullSink
from grammr.config import GrammrConfiguration
from grammr.llm.provider import QuotaExhaustedError
from grammr.models import CorrectionResult

ORIGINAL = "I are happy and she go home"
CORRECTED = "I am happy and she goes home"


class _FakeCorrector:
    def __init__(self, corrected: str | None = None, error: Exception | None = None) -> None:
        self.corrected = corrected
        self.error = error
        self.seen: list[str] = []

    def correct(self, text: str) -> CorrectionResult:
        self.seen.append(text)
        if self.error is not None:
            raise self.error
        return CorrectionResult(original=text, corrected=self.corrected, notes="fixed verbs")


class _FailingSink:
    def commit(self, text: str) -> None:
        raise RuntimeError("clipboard unavailable")


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in (
        "GRAMMR_MODE",
        "GRAMMR_LANGUAGE",
        "GRAMMR_GRANULARITY",
        "GRAMMR_AUTO_COPY",
        "GRAMMR_SHOW_DIFF",
        "GRAMMR_MAX_INPUT_LENGTH",
        "LLM_PRIMARY",
        "LLM_FALLBACK",
    ):
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("", encoding="utf-8")
    return env_file


def _run(
    argv: list[str],
    env_file: Path,
    *,
    answers: list[str] | None = None,
    stdin: str = "",
    sink: Any = None,
    corrector: _FakeCorrector | None = None,
) -> tuple[int, str, str]:
    args = cli.build_parser().parse_args([*argv, "--dotenv", str(env_file)])
    out, err = io.StringIO(), io.StringIO()
    pending = list(answers or [])

    def prompt(_message: str) -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    def factory(config: GrammrConfiguration) -> _FakeCorrector:
        if corrector is None:
            raise AssertionError("provider should not be called")
        return corrector

    code = cli.run_cli(
        args,
        stdin=io.StringIO(stdin),
        out=out,
        err=err,
        prompt=prompt,
        sink=sink,
        corrector_factory=factory,
    )
    return code, out.getvalue(), err.getvalue()


def test_corrected_pair_prints_corrected_text_and_diff(isolated_env: Path) -> None:
    code, out, err = _run([ORIGINAL, "--corrected", CORRECTED], isolated_env)

    assert code == 0
    assert out == CORRECTED + "\n"
    assert "[-are-]{+am+}" in err


def test_no_diff_flag_hides_diff(isolated_env: Path) -> None:
    code, _out, err = _run([ORIGINAL, "--corrected", CORRECTED, "--no-diff"], isolated_env)

    assert code == 0
    assert "[-" not in err


def test_interactive_review_applies_and_skips(isolated_env: Path) -> None:
    sink = NullSink()

    code, out, err = _run(
        [ORIGINAL, "--corrected", CORRECTED, "--review"],
        isolated_env,
        answers=["a", "s"],
        sink=sink,
    )

    assert code == 0
    assert out == "I am happy and she go home\n"
    assert sink.committed == ["I am happy and she go home"]
    assert "[1/2]" in err and "[2/2]" in err
    assert "Copied to clipboard." in err


def test_interactive_review_reprompts_on_unknown_answer(isolated_env: Path) -> None:
    code, out, err = _run(
        [ORIGINAL, "--corrected", CORRECTED, "--review"],
        isolated_env,
        answers=["maybe", "a", "a"],
        sink=NullSink(),
    )

    assert code == 0
    assert out == CORRECTED + "\n"
    assert "Unrecognised answer 'maybe'" in err


def test_quit_keeps_remaining_edits_unapplied(isolated_env: Path) -> None:
    code, out, _err = _run(
        [ORIGINAL, "--corrected", CORRECTED, "--review"],
        isolated_env,
        answers=["a", "q"],
        sink=NullSink(),
    )

    assert code == 0
    assert out == "I am happy and she go home\n"


def test_end_of_input_during_review_exits(isolated_env: Path) -> None:
    code, out, _err = _run(
        [ORIGINAL, "--corrected", CORRECTED, "--review"],
        isolated_env,
        answers=[],
        sink=NullSink(),
    )

    assert code == 0
    assert out == ORIGINAL + "\n"


@pytest.mark.parametrize(("flag", "expected"), [("--accept-all", CORRECTED), ("--reject-all", ORIGINAL)])
def test_accept_and_reject_all(isolated_env: Path, flag: str, expected: str) -> None:
    sink = NullSink()

    code, out, _err = _run([ORIGINAL, "--corrected", CORRECTED, flag], isolated_env, sink=sink)

    assert code == 0
    assert out == expected + "\n"
    assert sink.committed == [expected]


def test_no_copy_never_commits(isolated_env: Path) -> None:
    sink = NullSink()

    code, _out, err = _run(
        [ORIGINAL, "--corrected", CORRECTED, "--accept-all", "--no-copy"],
        isolated_env,
        sink=sink,
    )

    assert code == 0
    assert sink.committed == []
    assert "Copied" not in err


def test_sink_failure_is_a_warning_not_an_error(isolated_env: Path) -> None:
    code, out, err = _run(
        [ORIGINAL, "--corrected", CORRECTED, "--accept-all"],
        isolated_env,
        sink=_FailingSink(),
    )

    assert code == 0
    assert out == CORRECTED + "\n"
    assert "Warning: could not copy the result (clipboard unavailable)" in err


def test_reads_stdin_and_calls_corrector(isolated_env: Path) -> None:
    corrector = _FakeCorrector(corrected="Hello there")

    code, out, err = _run([], isolated_env, stdin="Hello world\n", corrector=corrector)

    assert code == 0
    assert corrector.seen == ["Hello world\n"]
    assert out == "Hello there\n"
    assert "Notes: fixed verbs" in err


def test_reads_text_and_corrected_from_files(isolated_env: Path, tmp_path: Path) -> None:
    source = tmp_path / "draft.txt"
    source.write_text("Hello world\n", encoding="utf-8")
    fixed = tmp_path / "fixed.txt"
    fixed.write_text("Hello there\n", encoding="utf-8")

    code, out, _err = _run(
        ["--file", str(source), "--corrected-file", str(fixed), "--accept-all", "--no-copy"],
        isolated_env,
    )

    assert code == 0
    assert out == "Hello there\n"


def test_unchanged_text_reports_no_changes(isolated_env: Path) -> None:
    code, out, err = _run(["Fine.", "--corrected", "Fine.", "--review"], isolated_env, sink=NullSink())

    assert code == 0
    assert out == "Fine.\n"
    assert "No changes suggested." in err


def test_empty_input_exits_with_input_error(isolated_env: Path) -> None:
    code, out, err = _run([], isolated_env, stdin="   ", corrector=_FakeCorrector(error=ValueError("text cannot be empty")))

    assert code == cli.EXIT_INPUT_ERROR
    assert out == ""
    assert "Error: text cannot be empty" in err


def test_offline_pair_respects_max_input_length(
    isolated_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("GRAMMR_MAX_INPUT_LENGTH", "10")

    code, out, err = _run([ORIGINAL, "--corrected", CORRECTED], isolated_env)

    assert code == cli.EXIT_INPUT_ERROR
    assert out == ""
    assert "maximum length of 10 characters" in err


def test_offline_pair_rejects_empty_input(isolated_env: Path) -> None:
    code, _out, err = _run(["   ", "--corrected", "Hello"], isolated_env)

    assert code == cli.EXIT_INPUT_ERROR
    assert "Error: text cannot be empty" in err


def test_missing_file_exits_with_input_error(isolated_env: Path, tmp_path: Path) -> None:
    code, _out, err = _run(["--file", str(tmp_path / "missing.txt")], isolated_env)

    assert code == cli.EXIT_INPUT_ERROR
    assert err.startswith("Error:")


def test_provider_failure_exits_with_provider_error(isolated_env: Path) -> None:
    corrector = _FakeCorrector(error=QuotaExhaustedError("All providers exceeded quota"))

    code, out, err = _run(["Hello world"], isolated_env, corrector=corrector)

    assert code == cli.EXIT_PROVIDER_ERROR
    assert out == ""
    assert "All providers exceeded quota" in err


def test_conflicting_flags_are_rejected() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["text", "--accept-all", "--reject-all"])
