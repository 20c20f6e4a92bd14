"""Public model exports for the project.

Keep the :mod:`grammr` namespace clean: tests and other modules should import
``from grammr.models import ChangeUnit, Decision``.
"""

from __future__ import annotations

from .change_unit import (
    ChangeUnit,
    Deletion,
    Edit,
    Insertion,
    Span,
    Substitution,
    all_applied,
    all_skipped,
)
from .correction import CorrectionResult, ProviderCorrection
from .enums import CorrectionMode, Decision, DiffGranularity, ReviewStatus, SpanKind

__all__ = [
    "ChangeUnit",
    "CorrectionMode",
    "CorrectionResult",
    "Decision",
    "Deletion",
    "DiffGranularity",
    "Edit",
    "Insertion",
    "ProviderCorrection",
    "ReviewStatus",
    "Span",
    "SpanKind",
    "Substitution",
    "all_applied",
    "all_skipped",
]
