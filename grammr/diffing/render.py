"""Plain-text projections of spans and change units for terminal output."""

from __future__ import annotations

from typing import Sequence

from grammr.models import ChangeUnit, Span, SpanKind

DELETE_MARKERS = ("[-", "-]")
INSERT_MARKERS = ("{+", "+}")


def render_inline_diff(spans: Sequence[Span]) -> str:
    """Render spans as one string using ``[-deleted-]`` and ``{+inserted+}`` markers."""
    parts: list[str] = []
    for span in spans:
        if span.kind is SpanKind.DELETE:
            parts.append(f"{DELETE_MARKERS[0]}{span.text}{DELETE_MARKERS[1]}")
        elif span.kind is SpanKind.INSERT:
            parts.append(f"{INSERT_MARKERS[0]}{span.text}{INSERT_MARKERS[1]}")
        else:
            parts.append(span.text)
    return "".join(parts)


def render_unit_context(
    spans: Sequence[Span], unit: ChangeUnit, *, width: int = 30
) -> str:
    """Render ``unit`` with up to ``width`` characters of equal text on each side."""
    before = "".join(span.text for span in spans[: unit.span_start] if span.kind is not SpanKind.INSERT)
    after = "".join(span.text for span in spans[unit.span_end :] if span.kind is not SpanKind.INSERT)
    lead = before[-width:]
    tail = after[:width]
    if len(before) > width:
        lead = "..." + lead
    if len(after) > width:
        tail = tail + "..."
    return lead + render_inline_diff(spans[unit.span_start : unit.span_end]) + tail
