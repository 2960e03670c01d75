r"""
Regex-backed custom types.

Usage:
    jwt = from_pattern("jwt", "Invalid JWT", None, None, r"[\w-]+\.[\w-]+\.[\w-]*")
    decode(jwt, "a.b.c")  # Ok("a.b.c")
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from hypothesis import strategies as st

from .custom import custom
from .decoder import decode_without_validation
from .model import CustomType, string
from .options import DecodeOptions
from .result import Result, fail, succeed


def from_pattern(
    name: str,
    message: str,
    options: Mapping[str, Any] | None,
    generator: st.SearchStrategy[str] | None,
    pattern: str | re.Pattern[str],
    *patterns: str | re.Pattern[str],
) -> CustomType:
    """
    Build a string custom type accepted by any of the given patterns.

    Args:
        name: Display name of the type
        message: Error message used when no pattern matches
        options: Base options (description, sensitive, message) or None
        generator: Strategy for example values; defaults to one derived
            from the first pattern
        pattern, *patterns: Each must match the whole string
    """
    compiled = tuple(re.compile(p) if isinstance(p, str) else p for p in (pattern, *patterns))
    examples = generator if generator is not None else st.from_regex(compiled[0], fullmatch=True)

    def decoder(value: Any, decode_options: DecodeOptions, _options: Mapping[str, Any]) -> Result[str]:
        return decode_without_validation(string(), value, decode_options)

    def validator(value: Any, _validation_options: Any, _options: Mapping[str, Any]) -> Result[bool]:
        if not isinstance(value, str):
            return fail("expected a string", value)
        if any(regex.fullmatch(value) for regex in compiled):
            return succeed(True)
        return fail(message, value)

    return custom(
        name,
        lambda value, _encode_options, _options: value,
        decoder,
        validator,
        lambda _max_depth, _options: examples,
        **dict(options or {}),
    )
