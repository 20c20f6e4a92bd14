"""Ordered provider chain with fallback on quota exhaustion.

Provider names come from :class:`grammr.config.GrammrConfiguration`
(``--provider`` / ``LLM_PRIMARY`` first, then ``LLM_FALLBACK``). With no names
configured every known provider is tried in ``DEFAULT_ORDER``.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from grammr.models import ProviderCorrection

from .gemini import GeminiProvider
from .mistral import MistralProvider
from .provider import (
    CorrectionProvider,
    ProviderConfigurationError,
    ProviderError,
    ProviderReporter,
    ProviderStatus,
    QuotaExhaustedError,
)

logger = logging.getLogger(__name__)

ProviderBuilder = Callable[[str], CorrectionProvider]

PROVIDER_BUILDERS: dict[str, ProviderBuilder] = {
    "gemini": GeminiProvider,
    "mistral": MistralProvider,
}
DEFAULT_ORDER = ("gemini", "mistral")


def resolve_provider_order(primary: str | None, fallbacks: Sequence[str] = ()) -> list[str]:
    """Return the de-duplicated provider names to try, primary first.

    Raises:
        ProviderConfigurationError: If a name is not a known provider.
    """
    requested = ([primary] if primary else []) + list(fallbacks)
    if not requested:
        requested = list(DEFAULT_ORDER)

    order: list[str] = []
    for raw in requested:
        name = raw.strip().lower()
        if not name or name in order:
            continue
        if name not in PROVIDER_BUILDERS:
            raise ProviderConfigurationError(
                f"Unknown provider {name!r} (available: {', '.join(PROVIDER_BUILDERS)})"
            )
        order.append(name)
    return order


class ProviderChain:
    """Ask each provider in turn until one returns a correction."""

    def __init__(
        self,
        providers: Sequence[CorrectionProvider],
        *,
        reporter: ProviderReporter | None = None,
    ) -> None:
        if not providers:
            raise ValueError("ProviderChain needs at least one provider")
        self._providers = list(providers)
        self._reporter = reporter

    @classmethod
    def from_names(
        cls,
        names: Sequence[str],
        *,
        system_prompt: str,
        reporter: ProviderReporter | None = None,
    ) -> "ProviderChain":
        providers = []
        for name in names:
            try:
                providers.append(PROVIDER_BUILDERS[name](system_prompt))
            except ProviderError:
                raise
            except ValueError as exc:
                # genai.Client() reports a missing API key this way.
                raise ProviderConfigurationError(f"Could not set up {name}: {exc}") from exc
        return cls(providers, reporter=reporter)

    @property
    def names(self) -> list[str]:
        return [provider.name for provider in self._providers]

    def correct(self, user_prompt: str) -> ProviderCorrection:
        """Return the first provider's correction.

        Quota errors move on to the next provider. Any other failure stops
        the chain; SDK exceptions are wrapped in :class:`ProviderError`.
        """
        last_quota_error: QuotaExhaustedError | None = None
        for provider in self._providers:
            try:
                correction = provider.correct(user_prompt)
            except QuotaExhaustedError as exc:
                last_quota_error = exc
                logger.warning("%s is out of quota; trying the next provider", provider.name)
                self._report(provider.name, ProviderStatus.QUOTA, exc)
                continue
            except ProviderError as exc:
                self._report(provider.name, ProviderStatus.FAILURE, exc)
                raise
            except Exception as exc:
                self._report(provider.name, ProviderStatus.FAILURE, exc)
                raise ProviderError(f"{provider.name} request failed: {exc}") from exc
            self._report(provider.name, ProviderStatus.SUCCESS)
            return correction
        raise QuotaExhaustedError(
            f"Every provider is out of quota ({', '.join(self.names)})"
        ) from last_quota_error

    def _report(
        self, name: str, status: ProviderStatus, error: Exception | None = None
    ) -> None:
        if self._reporter is not None:
            self._reporter(name, status, error)
