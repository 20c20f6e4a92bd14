"""Grammar correction through the LLM provider chain.

The corrector is the only producer of ``(original, corrected)`` pairs. Any
provider or parsing failure is raised here, before a review session exists.
"""

from __future__ import annotations

import logging

from grammr.config import GrammrConfiguration, validate_text_input
from grammr.llm.chain import ProviderChain, resolve_provider_order
from grammr.llm.provider import ProviderReporter, ProviderStatus
from grammr.models import CorrectionResult
from grammr.prompt import render_system_prompt, render_user_prompt

logger = logging.getLogger(__name__)


def _log_provider_status(
    provider_name: str, status: ProviderStatus, error: Exception | None
) -> None:
    if status is ProviderStatus.SUCCESS:
        logger.debug("Provider %s returned a correction", provider_name)
    else:
        logger.info("Provider %s reported %s: %s", provider_name, status.value, error)


class Corrector:
    """Send text to the configured providers and return the correction."""

    def __init__(self, chain: ProviderChain, *, max_input_length: int) -> None:
        self._chain = chain
        self._max_input_length = max_input_length

    @classmethod
    def from_configuration(
        cls,
        config: GrammrConfiguration,
        *,
        reporter: ProviderReporter | None = _log_provider_status,
    ) -> "Corrector":
        """Build the provider chain for ``config``.

        Raises:
            ProviderConfigurationError: If a provider name is unknown or a
                provider cannot be set up (usually a missing API key).
        """
        order = resolve_provider_order(config.llm_provider, config.llm_fallbacks)
        chain = ProviderChain.from_names(
            order,
            system_prompt=render_system_prompt(config.mode, config.language),
            reporter=reporter,
        )
        logger.info("Using providers: %s", ", ".join(chain.names))
        return cls(chain, max_input_length=config.max_input_length)

    def correct(self, text: str) -> CorrectionResult:
        """Return the correction for ``text``.

        Raises:
            ValueError: If ``text`` is empty or longer than the configured limit.
            ProviderError: If no provider produced a usable correction.
        """
        validate_text_input(text, self._max_input_length)
        reply = self._chain.correct(render_user_prompt(text))
        result = CorrectionResult(
            original=text, corrected=reply.corrected_text, notes=reply.notes
        )
        logger.info(
            "Correction received (%d -> %d characters, %s)",
            len(result.original),
            len(result.corrected),
            "changed" if result.changed else "unchanged",
        )
        return result


def correction_from_pair(original: str, corrected: str) -> CorrectionResult:
    """Wrap an externally produced pair (e.g. ``--corrected``) for review."""
    return CorrectionResult(original=original, corrected=corrected)
