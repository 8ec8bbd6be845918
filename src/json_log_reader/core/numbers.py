"""Number-preserving JSON parsing.

Parsing happens in two phases:

1. ``parse`` decodes JSON text while keeping every number literal as a
   :class:`JsonNumber` token (the literal text, untouched).
2. ``transform_numbers`` walks the decoded tree and turns each token into an
   ``int`` when the literal has no fraction and no exponent, and into a
   ``float`` otherwise.

Keeping the phases apart means integers are never routed through a float,
so ``{"id": 12345678901234567890}`` stays exact.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

# Characters allowed between JSON tokens (RFC 8259).
_JSON_WS = " \t\n\r"

# Surrogate pairs are already joined by the json module; any left are unpaired.
_LONE_SURROGATE_RE = re.compile("[\ud800-\udfff]")


class JsonNumber(str):
    """A JSON number literal kept as text until it is classified."""

    __slots__ = ()

    def is_integral(self) -> bool:
        return not any(c in self for c in ".eE")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name!r}")


_DECODER = json.JSONDecoder(
    parse_int=JsonNumber,
    parse_float=JsonNumber,
    parse_constant=_reject_constant,
)


def parse(text: str) -> Any:
    """Decode the first JSON value in text, keeping numbers as JsonNumber tokens.

    Leading whitespace is skipped and anything after the first complete value is
    ignored. Raises ValueError (json.JSONDecodeError) on malformed input.
    """
    start = len(text) - len(text.lstrip(_JSON_WS))
    value, _ = _DECODER.raw_decode(text, start)
    return value


def transform_number(token: JsonNumber) -> int | float | str:
    """Convert a number token into int or float.

    A non-integral literal too large for a float is returned as its literal
    text instead of an infinity.
    """
    if token.is_integral():
        return int(token)
    value = float(token)
    if math.isinf(value):
        return str(token)
    return value


def clean_text(text: str) -> str:
    """Replace unpaired UTF-16 surrogates (from \\uXXXX escapes) with U+FFFD."""
    return _LONE_SURROGATE_RE.sub("\ufffd", text)


def transform_numbers(value: Any) -> Any:
    """Recursively replace JsonNumber tokens inside dicts and lists.

    Strings and keys are also cleaned of unpaired surrogates so every value
    can be encoded as UTF-8.
    """
    if isinstance(value, JsonNumber):
        return transform_number(value)
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, dict):
        return {clean_text(k): transform_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [transform_numbers(v) for v in value]
    return value


def loads(text: str) -> Any:
    """Parse JSON text with integer/float distinction preserved."""
    return transform_numbers(parse(text))
