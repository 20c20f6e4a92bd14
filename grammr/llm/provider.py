"""Contract shared by the correction providers and the errors they raise.

A provider is built with the rendered system prompt (mode and language) and
turns one rendered user prompt into a validated :class:`ProviderCorrection`.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol

from grammr.models import ProviderCorrection


class ProviderStatus(str, Enum):
    """Outcome of one provider attempt, as passed to a reporter."""

    SUCCESS = "success"
    QUOTA = "quota"
    FAILURE = "failure"


ProviderReporter = Callable[[str, ProviderStatus, "Exception | None"], None]


class ProviderError(Exception):
    """A correction provider could not produce a correction."""


class QuotaExhaustedError(ProviderError):
    """The provider refused the request for quota or rate-limit reasons."""


class ProviderConfigurationError(ProviderError):
    """A provider could not be set up (unknown name, missing API key)."""


class MalformedReplyError(ProviderError):
    """The provider answered, but the reply is not a usable correction.

    The raw reply is kept so ``--log-level DEBUG`` runs and error output can
    show what the model actually said.
    """

    MAX_REPLY_CHARS = 2000

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        reply_text: str | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.reply_text = reply_text

    def __str__(self) -> str:
        message = super().__str__()
        if self.provider:
            message = f"{self.provider}: {message}"
        if self.reply_text is None:
            return message
        reply = self.reply_text
        if len(reply) > self.MAX_REPLY_CHARS:
            reply = reply[: self.MAX_REPLY_CHARS] + "... [truncated]"
        return f"{message}\n--- Reply ---\n{reply}"


class CorrectionProvider(Protocol):
    """One LLM backend able to correct a rendered user prompt."""

    name: str

    def correct(self, user_prompt: str) -> ProviderCorrection: ...
