"""Render correction prompt templates in grammr/prompt/promptFiles using pystache.

The system prompt is assembled from ``system_correction.md`` plus the shared
partials listed in ``TEMPLATE_PARTIALS``; the style paragraph comes from the
``mode_<mode>.md`` file for the requested correction mode. Partials may be
wrapped in a code fence so they preview nicely; the fence is stripped.

Usage:
    python -m grammr.prompt.render_prompt [mode] [language]
"""

from __future__ import annotations

import sys
from pathlib import Path

import pystache

from grammr.models import CorrectionMode

PROMPTS_DIR = Path(__file__).parent / "promptFiles"

SYSTEM_TEMPLATE = "system_correction.md"
USER_TEMPLATE = "user_correction.md"

TEMPLATE_PARTIALS: dict[str, list[str]] = {
    SYSTEM_TEMPLATE: ["correction_rules", "output_format"],
    USER_TEMPLATE: [],
}


def _read_prompt(name: str) -> str:
    p = PROMPTS_DIR / name
    if not p.exists():
        raise FileNotFoundError(f"Prompt file not found: {p}")
    return p.read_text(encoding="utf-8")


def _strip_code_fences(s: str) -> str:
    """Strip a single leading and trailing code-fence block if present.

    Handles fences like ``` or ```` optionally followed by a language tag.
    """
    lines = s.splitlines()
    if not lines:
        return s
    if lines[0].lstrip().startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].lstrip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()


def _renderer_for(template_name: str) -> pystache.Renderer:
    partials = {
        name: _strip_code_fences(_read_prompt(f"{name}.md"))
        for name in TEMPLATE_PARTIALS.get(template_name, [])
    }
    return pystache.Renderer(partials=partials)


def build_context(mode: CorrectionMode | str, language: str) -> dict:
    resolved_mode = CorrectionMode.coerce(mode)
    language = (language or "english").strip()
    return {
        "mode": resolved_mode.value,
        "mode_instruction": _read_prompt(f"mode_{resolved_mode.value}.md").strip(),
        "language": language.capitalize(),
        "non_english": language.lower() != "english",
    }


def render_system_prompt(
    mode: CorrectionMode | str = CorrectionMode.CASUAL, language: str = "english"
) -> str:
    """Return the system prompt for ``mode`` and ``language``."""
    renderer = _renderer_for(SYSTEM_TEMPLATE)
    return renderer.render(_read_prompt(SYSTEM_TEMPLATE), build_context(mode, language)).strip()


def render_user_prompt(text: str) -> str:
    """Return the user prompt carrying ``text`` verbatim (no HTML escaping)."""
    renderer = _renderer_for(USER_TEMPLATE)
    return renderer.render(_read_prompt(USER_TEMPLATE), {"text": text}).rstrip("\n")


if __name__ == "__main__":
    mode_arg = sys.argv[1] if len(sys.argv) > 1 else CorrectionMode.CASUAL.value
    language_arg = sys.argv[2] if len(sys.argv) > 2 else "english"
    print(render_system_prompt(mode_arg, language_arg))
