"""Command-line interface for grammr.

Reads text, asks the configured LLM providers for a correction, shows the
edits, and optionally walks through them so each one can be applied or
skipped before the final text is printed and copied.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, TextIO

from grammr.clipboard import ClipboardError, ClipboardSink
from grammr.config import GrammrConfiguration, load_configuration, validate_text_input
from grammr.correction import Corrector, correction_from_pair
from grammr.diffing import render_inline_diff, render_unit_context
from grammr.llm.provider import ProviderError
from grammr.models import CorrectionMode, CorrectionResult, DiffGranularity
from grammr.review import CommitSink, ReviewSession, ReviewSnapshot

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_PROVIDER_ERROR = 2

REVIEW_HELP = "a = apply, s = skip, q = stop reviewing (keep the rest unchanged)"

Prompt = Callable[[str], str]
CorrectorFactory = Callable[[GrammrConfiguration], Corrector]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grammr",
        description="Correct grammar with an LLM and review each edit before using it.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Correct a sentence and print the result
  python -m grammr "I are happy"

  # Correct a file and decide on each edit
  python -m grammr --file draft.txt --review

  # Review a correction you already have, without calling a provider
  python -m grammr "I are happy" --corrected "I am happy" --review

  # Read from the clipboard, accept everything, copy the result back
  python -m grammr --paste --accept-all

Environment Variables:
  GRAMMR_MODE, GRAMMR_LANGUAGE, GRAMMR_GRANULARITY, GRAMMR_AUTO_COPY,
  GRAMMR_SHOW_DIFF, GRAMMR_MAX_INPUT_LENGTH, LLM_PRIMARY, LLM_FALLBACK,
  GEMINI_API_KEY, MISTRAL_API_KEY, GEMINI_MIN_REQUEST_INTERVAL, GEMINI_MAX_RETRIES
        """,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument("text", nargs="?", help="Text to correct (default: read stdin)")
    source.add_argument("-f", "--file", type=Path, help="Read the text to correct from a file")
    source.add_argument("--paste", action="store_true", help="Read the text to correct from the clipboard")

    corrected = parser.add_mutually_exclusive_group()
    corrected.add_argument(
        "--corrected",
        help="Use this corrected text instead of calling an LLM provider",
    )
    corrected.add_argument(
        "--corrected-file",
        type=Path,
        help="Read the corrected text from a file instead of calling an LLM provider",
    )

    decisions = parser.add_mutually_exclusive_group()
    decisions.add_argument(
        "-r",
        "--review",
        action="store_true",
        help="Apply or skip each edit interactively",
    )
    decisions.add_argument("--accept-all", action="store_true", help="Apply every edit")
    decisions.add_argument("--reject-all", action="store_true", help="Skip every edit")

    parser.add_argument(
        "--mode",
        choices=CorrectionMode.all_values(),
        help="Correction style (default: casual or GRAMMR_MODE)",
    )
    parser.add_argument("--language", help="Language of the text (default: english or GRAMMR_LANGUAGE)")
    parser.add_argument(
        "--granularity",
        choices=DiffGranularity.all_values(),
        help="Split edits on words or characters (default: word or GRAMMR_GRANULARITY)",
    )
    parser.add_argument("--provider", help="Primary LLM provider (default: gemini or LLM_PRIMARY)")
    parser.add_argument("--dotenv", type=Path, help="Path to .env file for API keys")

    copy = parser.add_mutually_exclusive_group()
    copy.add_argument("--copy", dest="auto_copy", action="store_true", default=None, help="Copy the final text to the clipboard")
    copy.add_argument("--no-copy", dest="auto_copy", action="store_false", default=None, help="Never touch the clipboard")

    parser.add_argument("--no-diff", dest="show_diff", action="store_false", default=None, help="Do not print the inline diff")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def _read_source_text(args: argparse.Namespace, stdin: TextIO) -> str:
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    if args.paste:
        return ClipboardSink().read()
    if args.text is not None:
        return args.text
    return stdin.read()


def _read_corrected_text(args: argparse.Namespace) -> str | None:
    if args.corrected_file is not None:
        return args.corrected_file.read_text(encoding="utf-8")
    return args.corrected


def _decisions_requested(args: argparse.Namespace) -> bool:
    return bool(args.review or args.accept_all or args.reject_all)


def _select_sink(
    args: argparse.Namespace, config: GrammrConfiguration, sink: CommitSink | None
) -> CommitSink | None:
    if args.auto_copy is False:
        return None
    # Reviewing always ends with a copy unless --no-copy was given.
    if not (config.auto_copy or _decisions_requested(args)):
        return None
    return sink if sink is not None else ClipboardSink()


def review_interactively(
    session: ReviewSession, prompt: Prompt, err: TextIO
) -> ReviewSnapshot:
    """Drive ``session`` from ``prompt`` answers until it completes."""
    print(f"{session.total} edit(s) to review. {REVIEW_HELP}", file=err)
    snapshot = session.snapshot()
    while not session.is_complete:
        unit = session.current_unit
        if unit is None:
            snapshot = session.exit()
            break
        print(
            f"\n[{session.cursor + 1}/{session.total}] {unit.describe()}\n"
            f"  {render_unit_context(session.spans, unit)}",
            file=err,
        )
        try:
            answer = prompt("Apply? [a/s/q] ").strip().lower()
        except EOFError:
            answer = "q"

        if answer in ("a", "apply", "y", "yes"):
            snapshot = session.apply()
        elif answer in ("s", "skip", "n", "no"):
            snapshot = session.skip()
        elif answer in ("q", "quit", "exit"):
            snapshot = session.exit()
        else:
            print(f"Unrecognised answer {answer!r}. {REVIEW_HELP}", file=err)
    return snapshot


def review_all(session: ReviewSession, *, accept: bool) -> ReviewSnapshot:
    snapshot = session.snapshot()
    while not session.is_complete:
        snapshot = session.apply() if accept else session.skip()
    return snapshot


def _commit_plain(text: str, sink: CommitSink | None, err: TextIO) -> None:
    if sink is None:
        return
    try:
        sink.commit(text)
    except Exception as exc:
        logger.warning("Failed to copy final text: %s", exc)
        print(f"Warning: could not copy the result ({exc})", file=err)


def _resolve_correction(
    args: argparse.Namespace,
    config: GrammrConfiguration,
    text: str,
    corrector_factory: CorrectorFactory,
) -> CorrectionResult:
    corrected = _read_corrected_text(args)
    if corrected is not None:
        validate_text_input(text, config.max_input_length)
        return correction_from_pair(text, corrected)
    corrector = corrector_factory(config)
    return corrector.correct(text)


def run_cli(
    args: argparse.Namespace,
    *,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
    prompt: Prompt | None = None,
    sink: CommitSink | None = None,
    corrector_factory: CorrectorFactory = Corrector.from_configuration,
) -> int:
    stdin = stdin or sys.stdin
    out = out or sys.stdout
    err = err or sys.stderr
    prompt = prompt or input

    try:
        config = load_configuration(
            dotenv_path=args.dotenv,
            mode=args.mode,
            language=args.language,
            granularity=args.granularity,
            llm_provider=args.provider,
            auto_copy=args.auto_copy,
            show_diff=args.show_diff,
        )
        text = _read_source_text(args, stdin)
        result = _resolve_correction(args, config, text, corrector_factory)
    except ProviderError as exc:
        print(f"Error: {exc}", file=err)
        return EXIT_PROVIDER_ERROR
    except (ValueError, OSError, ClipboardError) as exc:
        print(f"Error: {exc}", file=err)
        return EXIT_INPUT_ERROR

    if result.notes:
        print(f"Notes: {result.notes}", file=err)

    commit_sink = _select_sink(args, config, sink)
    session = ReviewSession.from_correction(
        result, sink=commit_sink, granularity=config.granularity
    )

    if not session.has_changes:
        print("No changes suggested.", file=err)
        print(result.corrected, file=out)
        _commit_plain(result.corrected, commit_sink, err)
        return EXIT_OK

    if config.show_diff:
        print(render_inline_diff(session.spans), file=err)

    if args.review:
        snapshot = review_interactively(session, prompt, err)
    elif args.accept_all or args.reject_all:
        snapshot = review_all(session, accept=bool(args.accept_all))
    else:
        print(result.corrected, file=out)
        _commit_plain(result.corrected, commit_sink, err)
        return EXIT_OK

    if snapshot.commit_error is not None:
        print(f"Warning: could not copy the result ({snapshot.commit_error})", file=err)
    elif commit_sink is not None:
        print("Copied to clipboard.", file=err)
    print(snapshot.final_text, file=out)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run_cli(args)


if __name__ == "__main__":
    raise SystemExit(main())
