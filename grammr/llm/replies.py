"""Turn a provider's raw reply into a :class:`ProviderCorrection`.

The correction prompt asks for one JSON object. Models still wrap it in code
fences, add a sentence around it or drop a closing quote now and then, so the
outermost JSON fragment is cut out and repaired before validation.
"""

from __future__ import annotations

import json
from typing import Any

from json_repair import repair_json
from pydantic import ValidationError

from grammr.models import ProviderCorrection

from .provider import MalformedReplyError


def json_fragment(text: str) -> str:
    """Return the text from the first ``{``/``[`` to its last matching closer.

    Raises:
        ValueError: If the text holds no JSON object or array.
    """
    starts = [index for index in (text.find("{"), text.find("[")) if index != -1]
    if not starts:
        raise ValueError("reply contains no JSON object")
    start = min(starts)
    end = text.rfind("}" if text[start] == "{" else "]")
    if end <= start:
        raise ValueError("reply contains an unterminated JSON object")
    return text[start : end + 1]


def _load_payload(text: str) -> Any:
    payload = json.loads(repair_json(json_fragment(text)))
    # Some models answer with a one-element array.
    if isinstance(payload, list) and len(payload) == 1:
        return payload[0]
    return payload


def parse_correction_reply(reply_text: str | None, *, provider: str) -> ProviderCorrection:
    """Validate ``reply_text`` as a correction.

    Raises:
        MalformedReplyError: If the reply is empty, not JSON, or lacks
            ``corrected_text``.
    """
    if not isinstance(reply_text, str) or not reply_text.strip():
        raise MalformedReplyError(
            "empty reply", provider=provider, reply_text=None if reply_text is None else str(reply_text)
        )
    try:
        payload = _load_payload(reply_text)
    except ValueError as exc:
        raise MalformedReplyError(
            f"reply is not JSON ({exc})", provider=provider, reply_text=reply_text
        ) from exc
    try:
        return ProviderCorrection.model_validate(payload)
    except ValidationError as exc:
        raise MalformedReplyError(
            f"reply does not match the correction format ({exc.error_count()} error(s))",
            provider=provider,
            reply_text=reply_text,
        ) from exc
