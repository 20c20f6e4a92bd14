"""Group diff spans into reviewable change units.

``group_spans`` is the single definition of how spans pair up into edits.
Both the builder below and :mod:`grammr.diffing.reconstruction` walk spans
through it, so pairing and replay cannot disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from grammr.models import (
    ChangeUnit,
    DiffGranularity,
    Deletion,
    Edit,
    Insertion,
    Span,
    SpanKind,
    Substitution,
)

from .primitive import compute_spans


@dataclass(frozen=True)
class SpanGroup:
    """One non-equal run of spans: ``spans[start:end]`` form ``edit``."""

    start: int
    end: int
    edit: Edit


def group_spans(spans: Sequence[Span]) -> list[SpanGroup]:
    """Pair each DELETE directly followed by an INSERT; everything else stands alone.

    EQUAL spans are skipped. Only one delete+insert pair merges per group.
    """
    groups: list[SpanGroup] = []
    i = 0
    while i < len(spans):
        span = spans[i]
        if span.kind is SpanKind.EQUAL:
            i += 1
            continue

        if (
            span.kind is SpanKind.DELETE
            and i + 1 < len(spans)
            and spans[i + 1].kind is SpanKind.INSERT
        ):
            groups.append(
                SpanGroup(i, i + 2, Substitution(span.text, spans[i + 1].text))
            )
            i += 2
            continue

        if span.kind is SpanKind.DELETE:
            groups.append(SpanGroup(i, i + 1, Deletion(span.text)))
        else:
            groups.append(SpanGroup(i, i + 1, Insertion(span.text)))
        i += 1
    return groups


def units_from_spans(spans: Sequence[Span]) -> list[ChangeUnit]:
    """Build undecided change units for an already computed span list."""
    return [
        ChangeUnit(edit=group.edit, span_start=group.start, span_end=group.end)
        for group in group_spans(spans)
    ]


def build_change_units(
    original: str,
    corrected: str,
    *,
    granularity: DiffGranularity | str = DiffGranularity.WORD,
) -> list[ChangeUnit]:
    """Return the ordered, all-undecided change units for a text pair.

    Identical inputs yield an empty list.
    """
    if original == corrected:
        return []
    return units_from_spans(compute_spans(original, corrected, granularity=granularity))
