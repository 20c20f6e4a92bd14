from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammr.diffing import build_change_units, group_spans, units_from_spans
from grammr.models import (
    ChangeUnit,
    Decision,
    Deletion,
    Insertion,
    Span,
    SpanKind,
    Substitution,
    all_applied,
    all_skipped,
)


def test_identical_texts_have_no_units() -> None:
    assert build_change_units("Nothing to fix.", "Nothing to fix.") == []
    assert build_change_units("", "") == []


def test_replaced_word_is_a_substitution() -> None:
    units = build_change_units("Hello world", "Hello there")

    assert len(units) == 1
    assert units[0].edit == Substitution(original="world", proposed="there")
    assert units[0].decision is Decision.UNDECIDED


def test_appended_text_is_an_insertion() -> None:
    units = build_change_units("Hello", "Hello world")

    assert [unit.edit for unit in units] == [Insertion(proposed=" world")]


def test_removed_text_is_a_deletion() -> None:
    units = build_change_units("Hello world", "Hello")

    assert [unit.edit for unit in units] == [Deletion(original=" world")]


def test_multiple_edits_keep_document_order() -> None:
    units = build_change_units(
        "I are happy and she go home", "I am happy and she goes home"
    )

    assert [unit.edit for unit in units] == [
        Substitution(original="are", proposed="am"),
        Substitution(original="go", proposed="goes"),
    ]
    assert all(unit.decision is Decision.UNDECIDED for unit in units)


def test_insert_then_delete_does_not_pair() -> None:
    spans = [
        Span(SpanKind.EQUAL, "a"),
        Span(SpanKind.INSERT, "x"),
        Span(SpanKind.DELETE, "y"),
        Span(SpanKind.EQUAL, "b"),
    ]

    units = units_from_spans(spans)

    assert [unit.edit for unit in units] == [Insertion("x"), Deletion("y")]
    assert [(unit.span_start, unit.span_end) for unit in units] == [(1, 2), (2, 3)]


def test_only_one_delete_insert_pair_merges() -> None:
    spans = [
        Span(SpanKind.DELETE, "a"),
        Span(SpanKind.INSERT, "b"),
        Span(SpanKind.INSERT, "c"),
    ]

    groups = group_spans(spans)

    assert [group.edit for group in groups] == [Substitution("a", "b"), Insertion("c")]


def test_unit_texts_and_description() -> None:
    substitution = ChangeUnit(Substitution("are", "am"), 1, 3)
    deletion = ChangeUnit(Deletion(" very"), 1, 2)
    insertion = ChangeUnit(Insertion(","), 1, 2)

    assert substitution.kind == "substitution"
    assert (substitution.original_text, substitution.proposed_text) == ("are", "am")
    assert (deletion.original_text, deletion.proposed_text) == (" very", "")
    assert (insertion.original_text, insertion.proposed_text) == ("", ",")
    assert substitution.describe() == "'are' -> 'am'"
    assert deletion.describe() == "delete ' very'"
    assert insertion.describe() == "insert ','"


def test_all_applied_and_all_skipped_return_copies() -> None:
    units = build_change_units("Hello world", "Hello there")

    applied = all_applied(units)
    skipped = all_skipped(units)

    assert [unit.decision for unit in applied] == [Decision.APPLIED]
    assert [unit.decision for unit in skipped] == [Decision.SKIPPED]
    assert units[0].decision is Decision.UNDECIDED
