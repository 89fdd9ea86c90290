"""
Entity decoding for manifest text.

Responsibilities:
- decode the fixed table of named entities plus numeric references in a string
- apply the string decoder to every string leaf of a parsed JSON value
"""

from __future__ import annotations

import re
from typing import Any

from .rules import ENTITY_TABLE, FALLBACK_CHAR, NUMERIC_ENTITY_PATTERN

_NAMED_PATTERNS = tuple(
    (re.compile(re.escape(spelling)), char) for spelling, char in ENTITY_TABLE.items()
)
_NUMERIC_RE = re.compile(NUMERIC_ENTITY_PATTERN)

_MAX_CODE_POINT = 0x10FFFF
_SURROGATES = range(0xD800, 0xE000)


def _code_point_to_char(value: int) -> str:
    if value > _MAX_CODE_POINT or value in _SURROGATES:
        return FALLBACK_CHAR
    return chr(value)


def _numeric_repl(match: re.Match[str]) -> str:
    decimal, hexadecimal = match.groups()
    try:
        if hexadecimal is not None:
            return _code_point_to_char(int(hexadecimal, 16))
        return _code_point_to_char(int(decimal, 10))
    except ValueError:
        # int() caps the digit count for huge decimal strings
        return FALLBACK_CHAR


def decode_entities(text: str) -> str:
    """
    Decode named and numeric character references in ``text``.

    Rules:
    - Only the spellings in ENTITY_TABLE are decoded by name; anything else
      (``&nbsp;`` and friends) is left as is.
    - ``&#N;`` and ``&#xH;`` become the character at that code point.
    - Out-of-range or surrogate code points become FALLBACK_CHAR. Never raises.
    """
    for pattern, char in _NAMED_PATTERNS:
        text = pattern.sub(char, text)
    return _NUMERIC_RE.sub(_numeric_repl, text)


def decode_value(value: Any) -> Any:
    """Return a copy of a parsed JSON value with every string leaf decoded."""
    if isinstance(value, str):
        return decode_entities(value)
    if isinstance(value, list):
        return [decode_value(item) for item in value]
    if isinstance(value, dict):
        return {key: decode_value(item) for key, item in value.items()}
    return value
