"""
Types that put few or no constraints on their values: `json`, `unknown`,
`never` and `void`.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from hypothesis import strategies as st

from ..custom import custom
from ..model import MISSING, CustomType
from ..result import Result, fail, succeed

MAX_GENERATED_ENTRIES = 5


def _as_json(value: Any) -> Any:
    """
    A JSON-compatible copy of `value`: tuples become lists, mappings become
    dicts. Raises ValueError for anything JSON cannot represent.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"{value} is not a JSON number")
        return value
    if isinstance(value, (list, tuple)):
        return [_as_json(item) for item in value]
    if isinstance(value, Mapping):
        if not all(isinstance(key, str) for key in value):
            raise ValueError("JSON object keys must be strings")
        return {key: _as_json(item) for key, item in value.items()}
    raise ValueError(f"{type(value).__name__} is not a JSON value")


def _json_examples(max_depth: int, _options: Mapping[str, Any]) -> st.SearchStrategy[Any]:
    leaves = (
        st.none()
        | st.booleans()
        | st.integers()
        | st.floats(allow_nan=False, allow_infinity=False)
        | st.text()
    )
    if max_depth <= 0:
        return leaves
    nested = _json_examples(max_depth - 1, _options)
    return (
        leaves
        | st.lists(nested, max_size=MAX_GENERATED_ENTRIES)
        | st.dictionaries(st.text(max_size=10), nested, max_size=MAX_GENERATED_ENTRIES)
    )


def _decode_json(value: Any, _decode_options: Any, _options: Mapping[str, Any]) -> Result[Any]:
    if value is MISSING:
        return succeed(None)
    try:
        return succeed(_as_json(value))
    except ValueError as e:
        return fail(f"expected a JSON value ({e})", value)


def _validate_json(value: Any, _validation_options: Any, _options: Mapping[str, Any]) -> Result[bool]:
    try:
        _as_json(value)
    except ValueError as e:
        return fail(f"expected a JSON value ({e})", value)
    return succeed(True)


def json(**options: Any) -> CustomType:
    """
    Any JSON value: null, booleans, numbers, strings, arrays and objects.

    Usage:
        decode(json(), {"a": [1, 2]})  # Ok({"a": [1, 2]})
    """
    return custom(
        "json",
        lambda value, _encode_options, _options: value,
        _decode_json,
        _validate_json,
        _json_examples,
        **options,
    )


def _encode_unknown(value: Any, encode_options: Any, options: Mapping[str, Any]) -> Any:
    if value is None or value is MISSING:
        return None
    if isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_encode_unknown(item, encode_options, options) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _encode_unknown(item, encode_options, options) for key, item in value.items()}
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def unknown(**options: Any) -> CustomType:
    """
    Any value at all, kept as is when decoding.

    Encoding makes a best effort at a JSON-compatible value: dates become ISO
    strings and other objects their `str()`, so the round trip is lossy.
    """
    return custom(
        "unknown",
        _encode_unknown,
        lambda value, _decode_options, _options: succeed(None if value is MISSING else value),
        lambda _value, _validation_options, _options: succeed(True),
        _json_examples,
        **options,
    )


def _refuse_encoding(value: Any, _encode_options: Any, _options: Mapping[str, Any]) -> Any:
    raise TypeError("Tried encoding a never value")


def never(**options: Any) -> CustomType:
    """A type without values: decoding and validation always fail."""
    return custom(
        "never",
        _refuse_encoding,
        lambda value, _decode_options, _options: fail("no value has type never", value),
        lambda value, _validation_options, _options: fail("no value has type never", value),
        lambda _max_depth, _options: st.nothing(),
        **options,
    )


def void(**options: Any) -> CustomType:
    """The absence of a value. Accepts null or a missing key, encodes as null."""
    return custom(
        "void",
        lambda _value, _encode_options, _options: None,
        lambda value, _decode_options, _options: (
            succeed(None) if value is None or value is MISSING else fail("expected null", value)
        ),
        lambda value, _validation_options, _options: (
            succeed(True) if value is None or value is MISSING else fail("expected null", value)
        ),
        lambda _max_depth, _options: st.none(),
        **options,
    )
