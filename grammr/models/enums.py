"""Enumerations shared by the diff, review and correction layers."""

from __future__ import annotations

from enum import Enum


class SpanKind(str, Enum):
    """Tag carried by every span returned from the diff primitive."""

    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


class Decision(str, Enum):
    """Reviewer decision recorded against a single change unit.

    Values:
        UNDECIDED: not reviewed yet (resolved conservatively on replay)
        APPLIED: the proposed edit is accepted
        SKIPPED: the proposed edit is rejected
    """

    UNDECIDED = "undecided"
    APPLIED = "applied"
    SKIPPED = "skipped"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


class ReviewStatus(str, Enum):
    """Coarse status reported to the host for rendering."""

    REVIEWING = "reviewing"
    COMPLETE = "complete"


class CorrectionMode(str, Enum):
    """Writing style requested from the correction provider.

    Values must match the partial names under ``grammr/prompt/promptFiles``.
    """

    CASUAL = "casual"
    FORMAL = "formal"
    ACADEMIC = "academic"
    TECHNICAL = "technical"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]

    @classmethod
    def coerce(cls, value: "CorrectionMode | str | None") -> "CorrectionMode":
        """Return the matching mode, falling back to ``CASUAL`` for unknown values."""
        if isinstance(value, cls):
            return value
        normalised = str(value or "").strip().lower()
        for member in cls:
            if member.value == normalised:
                return member
        return cls.CASUAL


class DiffGranularity(str, Enum):
    """Token size the diff primitive works at."""

    WORD = "word"
    CHAR = "char"

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]
