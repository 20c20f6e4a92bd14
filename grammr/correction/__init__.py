"""Producers of ``(original, corrected)`` pairs."""

from .corrector import Corrector, correction_from_pair

__all__ = ["Corrector", "correction_from_pair"]
