"""Rebuild a final string from diff spans and per-unit decisions.

Decision policy per edit kind:

================  ==========  ==========  ==========
Kind              Applied     Skipped     Undecided
================  ==========  ==========  ==========
Substitution      proposed    original    original
Deletion          (nothing)   original    original
Insertion         proposed    (nothing)   (nothing)
================  ==========  ==========  ==========

Undecided is conservative toward the original text. Units are consumed one
per span group, in order. The Undecided column is also used when the caller
supplies fewer units than there are groups, or a unit whose span range or
kind does not match its group. Extra trailing units are ignored.
"""

from __future__ import annotations

from typing import Sequence

from grammr.models import (
    ChangeUnit,
    Decision,
    Deletion,
    DiffGranularity,
    Edit,
    Insertion,
    Span,
    Substitution,
)

from .change_units import SpanGroup, group_spans
from .primitive import compute_spans


def resolve_edit(edit: Edit, decision: Decision) -> str:
    """Return the text ``edit`` contributes to the output under ``decision``."""
    if isinstance(edit, Substitution):
        return edit.proposed if decision is Decision.APPLIED else edit.original
    if isinstance(edit, Deletion):
        return "" if decision is Decision.APPLIED else edit.original
    if isinstance(edit, Insertion):
        return edit.proposed if decision is Decision.APPLIED else ""
    raise TypeError(f"Unsupported edit type: {type(edit).__name__}")


def _decision_for(group: SpanGroup, unit: ChangeUnit | None) -> Decision:
    if (
        unit is None
        or unit.span_start != group.start
        or type(unit.edit) is not type(group.edit)
    ):
        return Decision.UNDECIDED
    return unit.decision


def replay_spans(spans: Sequence[Span], change_units: Sequence[ChangeUnit]) -> str:
    """Walk ``spans`` group by group, consuming one unit per group in order."""
    groups = group_spans(spans)
    parts: list[str] = []
    cursor = 0
    for index, group in enumerate(groups):
        # Equal spans between the previous group and this one.
        parts.extend(span.text for span in spans[cursor : group.start])
        unit = change_units[index] if index < len(change_units) else None
        parts.append(resolve_edit(group.edit, _decision_for(group, unit)))
        cursor = group.end
    parts.extend(span.text for span in spans[cursor:])
    return "".join(parts)


def replay(
    original: str,
    corrected: str,
    change_units: Sequence[ChangeUnit],
    *,
    granularity: DiffGranularity | str = DiffGranularity.WORD,
) -> str:
    """Return the text produced by applying ``change_units`` decisions.

    Pure: the same arguments always give the same string. ``granularity``
    must match the one the units were built with.
    """
    if original == corrected:
        return original
    spans = compute_spans(original, corrected, granularity=granularity)
    return replay_spans(spans, change_units)
