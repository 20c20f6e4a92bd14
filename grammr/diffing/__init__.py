"""Diff-reconciliation engine: spans, change units and replay."""

from .change_units import SpanGroup, build_change_units, group_spans, units_from_spans
from .primitive import compute_spans, corrected_from_spans, original_from_spans, tokenize
from .reconstruction import replay, replay_spans, resolve_edit
from .render import render_inline_diff, render_unit_context

__all__ = [
    "SpanGroup",
    "build_change_units",
    "compute_spans",
    "corrected_from_spans",
    "group_spans",
    "original_from_spans",
    "render_inline_diff",
    "render_unit_context",
    "replay",
    "replay_spans",
    "resolve_edit",
    "tokenize",
    "units_from_spans",
]
