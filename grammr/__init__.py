"""grammr: LLM grammar correction with selective, per-edit review."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "cli",
    "config",
    "correction",
    "diffing",
    "review",
]
