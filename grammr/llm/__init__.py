"""Correction providers and the fallback chain that drives them."""

from .chain import ProviderChain, resolve_provider_order
from .gemini import GeminiProvider
from .mistral import MistralProvider
from .provider import (
    CorrectionProvider,
    MalformedReplyError,
    ProviderConfigurationError,
    ProviderError,
    ProviderStatus,
    QuotaExhaustedError,
)

__all__ = [
    "CorrectionProvider",
    "GeminiProvider",
    "MalformedReplyError",
    "MistralProvider",
    "ProviderChain",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderStatus",
    "QuotaExhaustedError",
    "resolve_provider_order",
]
