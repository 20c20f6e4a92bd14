"""Span and change-unit data model used by the review engine.

A ``Span`` is one tagged fragment produced by the diff primitive. A
``ChangeUnit`` is one reviewable edit built from one or two adjacent
non-equal spans. Its ``edit`` is exactly one of ``Substitution``,
``Deletion`` or ``Insertion``; only ``decision`` ever changes after the unit
is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Union

from grammr.models.enums import Decision, SpanKind


@dataclass(frozen=True)
class Span:
    """A contiguous fragment of one or both input strings."""

    kind: SpanKind
    text: str


@dataclass(frozen=True)
class Substitution:
    """A deleted run immediately replaced by an inserted run."""

    original: str
    proposed: str


@dataclass(frozen=True)
class Deletion:
    original: str


@dataclass(frozen=True)
class Insertion:
    proposed: str


Edit = Union[Substitution, Deletion, Insertion]


@dataclass
class ChangeUnit:
    """A single reviewable edit plus the reviewer's decision.

    Attributes:
        edit: The proposed edit (substitution, deletion or insertion).
        span_start: Index of the first span this unit covers.
        span_end: Index one past the last span this unit covers.
        decision: Current decision; ``UNDECIDED`` until reviewed.
    """

    edit: Edit
    span_start: int
    span_end: int
    decision: Decision = field(default=Decision.UNDECIDED)

    @property
    def kind(self) -> str:
        return type(self.edit).__name__.lower()

    @property
    def original_text(self) -> str:
        """Text this unit holds from the original string (may be empty)."""
        if isinstance(self.edit, (Substitution, Deletion)):
            return self.edit.original
        return ""

    @property
    def proposed_text(self) -> str:
        """Text this unit proposes for the corrected string (may be empty)."""
        if isinstance(self.edit, (Substitution, Insertion)):
            return self.edit.proposed
        return ""

    def with_decision(self, decision: Decision) -> "ChangeUnit":
        return replace(self, decision=decision)

    def describe(self) -> str:
        edit = self.edit
        if isinstance(edit, Substitution):
            return f"{edit.original!r} -> {edit.proposed!r}"
        if isinstance(edit, Deletion):
            return f"delete {edit.original!r}"
        return f"insert {edit.proposed!r}"


def all_applied(units: list[ChangeUnit]) -> list[ChangeUnit]:
    return [unit.with_decision(Decision.APPLIED) for unit in units]


def all_skipped(units: list[ChangeUnit]) -> list[ChangeUnit]:
    return [unit.with_decision(Decision.SKIPPED) for unit in units]
