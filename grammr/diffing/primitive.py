"""Span computation on top of ``diff-match-patch``.

``compute_spans`` is the only place the project talks to the diff library.
Everything downstream works on :class:`grammr.models.Span` lists, which
losslessly cover both inputs: ``EQUAL + DELETE`` texts rebuild the original,
``EQUAL + INSERT`` texts rebuild the corrected string.

Word granularity tokenises both texts into word, whitespace and punctuation
tokens, maps each distinct token to a single private character, diffs the
encoded strings and decodes the result. This keeps edits on word boundaries
("are" -> "am" rather than "re" -> "m").
"""

from __future__ import annotations

import re
from typing import Iterable

from diff_match_patch import diff_match_patch

from grammr.models import DiffGranularity, Span, SpanKind

_TOKEN_RE = re.compile(r"\w+|\s+|[^\w\s]", re.UNICODE)

# First code point used to encode tokens; the surrogate block is skipped.
_FIRST_TOKEN_CODE = 0x100
_SURROGATE_START = 0xD800
_SURROGATE_END = 0xDFFF

_OP_TO_KIND = {
    diff_match_patch.DIFF_EQUAL: SpanKind.EQUAL,
    diff_match_patch.DIFF_DELETE: SpanKind.DELETE,
    diff_match_patch.DIFF_INSERT: SpanKind.INSERT,
}


def _new_differ() -> diff_match_patch:
    dmp = diff_match_patch()
    # No deadline: the same pair must always produce the same spans.
    dmp.Diff_Timeout = 0
    return dmp


def tokenize(text: str) -> list[str]:
    """Split ``text`` into word, whitespace-run and punctuation tokens."""
    return _TOKEN_RE.findall(text)


class _TokenCodec:
    """Bidirectional token <-> single character mapping shared by both texts."""

    def __init__(self) -> None:
        self._token_to_char: dict[str, str] = {}
        self._char_to_token: dict[str, str] = {}
        self._next_code = _FIRST_TOKEN_CODE

    def encode(self, tokens: Iterable[str]) -> str:
        chars = []
        for token in tokens:
            char = self._token_to_char.get(token)
            if char is None:
                if _SURROGATE_START <= self._next_code <= _SURROGATE_END:
                    self._next_code = _SURROGATE_END + 1
                char = chr(self._next_code)
                self._next_code += 1
                self._token_to_char[token] = char
                self._char_to_token[char] = token
            chars.append(char)
        return "".join(chars)

    def decode(self, encoded: str) -> str:
        return "".join(self._char_to_token[char] for char in encoded)


def _raw_char_diffs(original: str, corrected: str) -> list[tuple[int, str]]:
    dmp = _new_differ()
    diffs = dmp.diff_main(original, corrected, False)
    dmp.diff_cleanupSemantic(diffs)
    return list(diffs)


def _raw_word_diffs(original: str, corrected: str) -> list[tuple[int, str]]:
    codec = _TokenCodec()
    encoded_original = codec.encode(tokenize(original))
    encoded_corrected = codec.encode(tokenize(corrected))

    dmp = _new_differ()
    diffs = dmp.diff_main(encoded_original, encoded_corrected, False)
    dmp.diff_cleanupSemantic(diffs)
    return [(op, codec.decode(encoded)) for op, encoded in diffs]


def compute_spans(
    original: str,
    corrected: str,
    *,
    granularity: DiffGranularity | str = DiffGranularity.WORD,
) -> list[Span]:
    """Return the ordered, semantically cleaned span list for a text pair.

    Empty fragments are dropped and adjacent fragments of the same kind are
    merged, so consecutive spans always differ in kind.
    """
    if original == corrected:
        return [Span(SpanKind.EQUAL, original)] if original else []

    if DiffGranularity(granularity) is DiffGranularity.CHAR:
        raw = _raw_char_diffs(original, corrected)
    else:
        raw = _raw_word_diffs(original, corrected)

    spans: list[Span] = []
    for op, text in raw:
        if not text:
            continue
        kind = _OP_TO_KIND[op]
        if spans and spans[-1].kind is kind:
            spans[-1] = Span(kind, spans[-1].text + text)
        else:
            spans.append(Span(kind, text))
    return spans


def original_from_spans(spans: Iterable[Span]) -> str:
    return "".join(span.text for span in spans if span.kind is not SpanKind.INSERT)


def corrected_from_spans(spans: Iterable[Span]) -> str:
    return "".join(span.text for span in spans if span.kind is not SpanKind.DELETE)
