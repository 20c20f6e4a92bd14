"""Mistral correction provider on top of the ``mistralai`` conversations API.

Environment Variables:
  MISTRAL_API_KEY  required unless a client is passed in
  MISTRAL_MODEL    model name (default: mistral-medium-latest)
"""

from __future__ import annotations

import os
from typing import Any

from mistralai import Mistral

from grammr.models import ProviderCorrection

from .provider import ProviderConfigurationError, QuotaExhaustedError
from .replies import parse_correction_reply


def _content_text(content: Any) -> str | None:
    if isinstance(content, str):
        return content
    # Newer models return a list of chunks; only text chunks matter here.
    if isinstance(content, list):
        parts = [getattr(chunk, "text", None) for chunk in content]
        text = "".join(part for part in parts if isinstance(part, str))
        return text or None
    return None


def reply_text(response: Any) -> str | None:
    """Return the assistant text of a conversations (or chat) response."""
    for entry in getattr(response, "outputs", None) or []:
        text = _content_text(getattr(entry, "content", None))
        if text and text.strip():
            return text
    choices = getattr(response, "choices", None)
    if choices:
        return _content_text(getattr(choices[0].message, "content", None))
    return None


class MistralProvider:
    name = "mistral"
    DEFAULT_MODEL = "mistral-medium-latest"
    TEMPERATURE = 0.2

    def __init__(
        self,
        system_prompt: str,
        *,
        client: Mistral | None = None,
        model: str | None = None,
    ) -> None:
        if client is None:
            # The SDK does not pick the key up from the environment itself.
            api_key = os.environ.get("MISTRAL_API_KEY")
            if not api_key:
                raise ProviderConfigurationError(
                    "MISTRAL_API_KEY is not set; add it to the environment or a .env file"
                )
            client = Mistral(api_key=api_key)
        self._client = client
        self._system_prompt = system_prompt
        self._model = model or os.environ.get("MISTRAL_MODEL") or self.DEFAULT_MODEL

    @property
    def model(self) -> str:
        return self._model

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    def correct(self, user_prompt: str) -> ProviderCorrection:
        try:
            response = self._client.beta.conversations.start(
                inputs=user_prompt,
                instructions=self._system_prompt,
                model=self._model,
                completion_args={"temperature": self.TEMPERATURE},
            )
        except Exception as exc:
            if getattr(exc, "status_code", None) == 429:
                raise QuotaExhaustedError("Mistral quota exhausted or rate limited") from exc
            raise
        return parse_correction_reply(reply_text(response), provider=self.name)
