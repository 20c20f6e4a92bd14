"""Pydantic model for a single correction returned by an LLM provider.

This maps to the JSON object requested by the correction prompt. Validation
normalises the strings the same way the review engine expects them: trailing
whitespace is stripped from both sides of the pair before diffing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def trim_trailing_whitespace(text: str) -> str:
    return text.rstrip(" \t\n\r")


class CorrectionResult(BaseModel):
    """An ``(original, corrected)`` pair ready for review.

    Contract:
    - original: the text sent for correction (non-empty after trimming)
    - corrected: the provider's correction; ``None`` is treated as empty
    - notes: optional free-form explanation from the provider (never diffed)
    """

    model_config = ConfigDict(extra="ignore")

    original: str
    corrected: str = Field(default="")
    notes: str = Field(default="")

    @field_validator("original", "corrected", mode="before")
    def _trim_text(cls, value: object) -> str:  # type: ignore[override]
        return trim_trailing_whitespace(str(value or ""))

    @field_validator("notes", mode="before")
    def _strip_notes(cls, value: object) -> str:  # type: ignore[override]
        return str(value or "").strip()

    @model_validator(mode="after")
    def final_checks(self) -> "CorrectionResult":
        if not self.original:
            raise ValueError("original must not be empty")
        return self

    @property
    def changed(self) -> bool:
        return self.original != self.corrected


class ProviderCorrection(BaseModel):
    """Shape of the JSON object the correction prompt asks providers for."""

    model_config = ConfigDict(extra="ignore")

    corrected_text: str
    notes: str = Field(default="")

    @field_validator("corrected_text", mode="before")
    def _require_text(cls, value: object) -> str:  # type: ignore[override]
        if value is None:
            raise ValueError("corrected_text must be present")
        return str(value)

    @field_validator("notes", mode="before")
    def _strip_notes(cls, value: object) -> str:  # type: ignore[override]
        return str(value or "").strip()
