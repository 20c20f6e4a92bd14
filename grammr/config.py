"""Runtime configuration for the grammr CLI.

Values are resolved in this order (later wins):

1. dataclass defaults
2. a ``.env`` file (``--dotenv`` or the nearest ``.env``), via python-dotenv
3. ``GRAMMR_*`` environment variables
4. explicit overrides, normally CLI flags

Environment Variables:
  GRAMMR_MODE              casual | formal | academic | technical (default: casual)
  GRAMMR_LANGUAGE          language of the input text (default: english)
  GRAMMR_GRANULARITY       word | char diff granularity (default: word)
  GRAMMR_AUTO_COPY         copy the final text to the clipboard (default: false)
  GRAMMR_SHOW_DIFF         print the inline diff (default: true)
  GRAMMR_MAX_INPUT_LENGTH  maximum characters sent for correction (default: 100000)
  LLM_PRIMARY              primary LLM provider (default: gemini)
  LLM_FALLBACK             fallback providers (comma-separated)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from grammr.models import CorrectionMode, DiffGranularity

logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 100_000

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class GrammrConfiguration:
    """Resolved settings for one CLI run."""

    mode: CorrectionMode = CorrectionMode.CASUAL
    language: str = "english"
    granularity: DiffGranularity = DiffGranularity.WORD
    auto_copy: bool = False
    show_diff: bool = True
    max_input_length: int = MAX_INPUT_LENGTH
    llm_provider: str | None = None
    llm_fallbacks: list[str] = field(default_factory=list)
    dotenv_path: Path | None = None

    def with_overrides(self, **overrides: Any) -> "GrammrConfiguration":
        """Return a copy with every non-``None`` override applied and normalised."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        values = {key: value for key, value in overrides.items() if value is not None}
        return _normalise(replace(self, **values))


def _parse_bool(raw: str | None, *, default: bool, name: str) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Ignoring invalid boolean for %s: %r", name, raw)
    return default


def _parse_int(raw: str | None, *, default: int, name: str) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid integer for %s: %r", name, raw)
        return default


def _split_names(value: str | None) -> list[str]:
    if not value:
        return []
    return [chunk.strip().lower() for chunk in value.split(",") if chunk.strip()]


def _normalise(config: GrammrConfiguration) -> GrammrConfiguration:
    mode = CorrectionMode.coerce(config.mode)
    if not isinstance(config.mode, CorrectionMode) and mode.value != str(config.mode).strip().lower():
        logger.warning("Unknown correction mode %r; using %s", config.mode, mode.value)

    granularity_raw = config.granularity
    if isinstance(granularity_raw, DiffGranularity):
        granularity = granularity_raw
    else:
        try:
            granularity = DiffGranularity(str(granularity_raw).strip().lower())
        except ValueError as exc:
            raise ValueError(
                f"granularity must be one of {', '.join(DiffGranularity.all_values())}"
            ) from exc

    if config.max_input_length <= 0:
        raise ValueError("max_input_length must be positive")

    language = (config.language or "english").strip().lower() or "english"
    provider = config.llm_provider.strip().lower() if config.llm_provider else None
    dotenv_path = Path(config.dotenv_path) if config.dotenv_path is not None else None

    return replace(
        config,
        mode=mode,
        granularity=granularity,
        language=language,
        llm_provider=provider or None,
        llm_fallbacks=[name.strip().lower() for name in config.llm_fallbacks if name.strip()],
        dotenv_path=dotenv_path,
    )


def load_configuration(
    dotenv_path: str | Path | None = None, **overrides: Any
) -> GrammrConfiguration:
    """Build the configuration from ``.env``, the environment and ``overrides``."""
    if dotenv_path is not None:
        load_dotenv(dotenv_path=Path(dotenv_path))
    else:
        load_dotenv()

    env = os.environ
    base = GrammrConfiguration(
        mode=env.get("GRAMMR_MODE", CorrectionMode.CASUAL.value),
        language=env.get("GRAMMR_LANGUAGE", "english"),
        granularity=env.get("GRAMMR_GRANULARITY", DiffGranularity.WORD.value),
        auto_copy=_parse_bool(env.get("GRAMMR_AUTO_COPY"), default=False, name="GRAMMR_AUTO_COPY"),
        show_diff=_parse_bool(env.get("GRAMMR_SHOW_DIFF"), default=True, name="GRAMMR_SHOW_DIFF"),
        max_input_length=_parse_int(
            env.get("GRAMMR_MAX_INPUT_LENGTH"),
            default=MAX_INPUT_LENGTH,
            name="GRAMMR_MAX_INPUT_LENGTH",
        ),
        llm_provider=env.get("LLM_PRIMARY") or None,
        llm_fallbacks=_split_names(env.get("LLM_FALLBACK")),
        dotenv_path=Path(dotenv_path) if dotenv_path is not None else None,
    )
    return base.with_overrides(**overrides)


def validate_text_input(text: str, max_length: int = MAX_INPUT_LENGTH) -> str:
    """Return ``text`` when it can be sent for correction, else raise ``ValueError``."""
    if not text or not text.strip():
        raise ValueError("text cannot be empty")
    if len(text) > max_length:
        raise ValueError(
            f"text exceeds maximum length of {max_length} characters (got {len(text)})"
        )
    return text
