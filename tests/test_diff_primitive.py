from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammr.diffing import (
    compute_spans,
    corrected_from_spans,
    original_from_spans,
    tokenize,
)
from grammr.models import DiffGranularity, Span, SpanKind


PAIRS = [
    ("Hello world", "Hello there"),
    ("Hello", "Hello world"),
    ("Hello world", "Hello"),
    ("I are happy", "I am happy"),
    ("I are happy and she go home", "I am happy and she goes home"),
    ("Hello 世界", "Hello, 世界"),
    ("", "Something new"),
    ("Something old", ""),
    ("Line one\nline two", "Line one.\nLine two."),
]


def test_tokenize_splits_words_whitespace_and_punctuation() -> None:
    assert tokenize("Hi,  there!") == ["Hi", ",", "  ", "there", "!"]
    assert tokenize("") == []


def test_identical_inputs_produce_single_equal_span() -> None:
    assert compute_spans("Same text", "Same text") == [Span(SpanKind.EQUAL, "Same text")]


def test_identical_empty_inputs_produce_no_spans() -> None:
    assert compute_spans("", "") == []


@pytest.mark.parametrize("granularity", DiffGranularity.all_values())
@pytest.mark.parametrize(("original", "corrected"), PAIRS)
def test_spans_rebuild_both_inputs(original: str, corrected: str, granularity: str) -> None:
    spans = compute_spans(original, corrected, granularity=granularity)

    assert original_from_spans(spans) == original
    assert corrected_from_spans(spans) == corrected


@pytest.mark.parametrize(("original", "corrected"), PAIRS)
def test_spans_are_non_empty_and_alternate_kind(original: str, corrected: str) -> None:
    spans = compute_spans(original, corrected)

    assert all(span.text for span in spans)
    for left, right in zip(spans, spans[1:]):
        assert left.kind is not right.kind


def test_word_granularity_keeps_edits_on_word_boundaries() -> None:
    spans = compute_spans("I are happy", "I am happy")

    assert spans == [
        Span(SpanKind.EQUAL, "I "),
        Span(SpanKind.DELETE, "are"),
        Span(SpanKind.INSERT, "am"),
        Span(SpanKind.EQUAL, " happy"),
    ]


def test_compute_spans_is_deterministic() -> None:
    original = "The quick brown fox jump over the lazy dogs ."
    corrected = "The quick brown fox jumps over the lazy dog."

    first = compute_spans(original, corrected)
    second = compute_spans(original, corrected)

    assert first == second


def test_unknown_granularity_is_rejected() -> None:
    with pytest.raises(ValueError):
        compute_spans("a", "b", granularity="sentence")
