"""Gemini correction provider on top of ``google-genai``.

Environment Variables:
  GEMINI_API_KEY               read by the SDK client
  GEMINI_MODEL                 model name (default: gemini-2.5-flash)
  GEMINI_MIN_REQUEST_INTERVAL  minimum seconds between requests (default: 0)
  GEMINI_MAX_RETRIES           retries after a 429 response (default: 0)
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any

from google import genai
from google.genai import types

try:
    from google.api_core import exceptions as google_exceptions
except ImportError:  # pragma: no cover - google-api-core ships with google-genai installs
    google_exceptions = None

from grammr.models import ProviderCorrection

from .provider import QuotaExhaustedError
from .replies import parse_correction_reply

logger = logging.getLogger(__name__)


def _env_number(name: str, cast: type, default: Any) -> Any:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", name, raw)
        return default


def _is_quota_exhausted(exc: Exception) -> bool:
    return google_exceptions is not None and isinstance(exc, google_exceptions.ResourceExhausted)


def _is_rate_limited(exc: Exception) -> bool:
    return google_exceptions is not None and isinstance(exc, google_exceptions.TooManyRequests)


class GeminiProvider:
    """Correct text with one ``generate_content`` call per request.

    ``ResourceExhausted`` means the quota is gone and is reported at once.
    A plain 429 is retried with exponential backoff up to ``max_retries``
    times before it is reported as quota exhaustion as well.
    """

    name = "gemini"
    DEFAULT_MODEL = "gemini-2.5-flash"
    TEMPERATURE = 0.2

    def __init__(
        self,
        system_prompt: str,
        *,
        client: genai.Client | None = None,
        model: str | None = None,
        min_request_interval: float | None = None,
        max_retries: int | None = None,
    ) -> None:
        self._client = client or genai.Client()
        self._model = model or os.environ.get("GEMINI_MODEL") or self.DEFAULT_MODEL
        # Corrections are short rewrites; thinking only adds latency.
        self._request_config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            thinking_config=types.ThinkingConfig(thinking_budget=0),
            temperature=self.TEMPERATURE,
        )
        if min_request_interval is None:
            min_request_interval = _env_number("GEMINI_MIN_REQUEST_INTERVAL", float, 0.0)
        if max_retries is None:
            max_retries = _env_number("GEMINI_MAX_RETRIES", int, 0)
        self._min_request_interval = max(0.0, min_request_interval)
        self._max_retries = max(0, max_retries)
        self._last_request_at: float | None = None

    @property
    def model(self) -> str:
        return self._model

    @property
    def system_prompt(self) -> str:
        return self._request_config.system_instruction

    def correct(self, user_prompt: str) -> ProviderCorrection:
        response = self._generate(user_prompt)
        return parse_correction_reply(getattr(response, "text", None), provider=self.name)

    def _generate(self, user_prompt: str) -> Any:
        attempt = 0
        while True:
            self._wait_for_slot()
            try:
                return self._client.models.generate_content(
                    model=self._model,
                    contents=user_prompt,
                    config=self._request_config,
                )
            except Exception as exc:
                if _is_quota_exhausted(exc):
                    raise QuotaExhaustedError("Gemini quota exhausted") from exc
                if not _is_rate_limited(exc):
                    raise
                if attempt >= self._max_retries:
                    raise QuotaExhaustedError(
                        f"Gemini still rate limited after {attempt + 1} attempt(s)"
                    ) from exc
                delay = self._backoff_delay(attempt)
                attempt += 1
                logger.info(
                    "Gemini rate limited; retry %d/%d in %.2fs",
                    attempt,
                    self._max_retries,
                    delay,
                )
                time.sleep(delay)
            finally:
                self._last_request_at = time.monotonic()

    def _backoff_delay(self, attempt: int) -> float:
        base = self._min_request_interval or 0.1
        return base * (2**attempt)

    def _wait_for_slot(self) -> None:
        if self._min_request_interval <= 0 or self._last_request_at is None:
            return
        elapsed = time.monotonic() - self._last_request_at
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
