"""
Tests for tessera.patterns.
"""

import re
import warnings
from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st

from tessera import Err, Ok, arbitrary, decode, encode, from_pattern
from tessera import patterns

HEX = from_pattern("hex", "Invalid hex color", None, None, r"#[0-9a-f]{6}", r"#[0-9a-f]{3}")


class TestFromPattern:
    def test_any_pattern_matches(self):
        assert decode(HEX, "#a0b1c2") == Ok("#a0b1c2")
        assert decode(HEX, "#abc") == Ok("#abc")

    def test_whole_string_must_match(self):
        result = decode(HEX, "#abcd")
        assert isinstance(result, Err)
        assert result.errors[0].message == "Invalid hex color"
        assert isinstance(decode(HEX, "color: #abc"), Err)

    def test_non_strings(self):
        assert decode(HEX, 10).errors[0].message == "expected a string"

    def test_casting_goes_through_string_decoding(self):
        digits = from_pattern("digits", "Invalid digits", None, None, r"[0-9]+")
        assert decode(digits, 123, {"typeCastingStrategy": "tryCasting"}) == Ok("123")

    def test_encode_is_identity(self):
        assert encode(HEX, "#abc") == "#abc"

    def test_base_options(self):
        t = from_pattern("code", "Invalid code", {"description": "a code"}, None, re.compile("[A-Z]{3}"))
        assert t.description == "a code"
        assert t.name == "code"

    @given(arbitrary(from_pattern("code", "Invalid code", None, st.just("ABC"), r"[A-Z]{3}")))
    def test_custom_generator(self, value):
        assert value == "ABC"

    @given(arbitrary(HEX))
    def test_generated_values_validate(self, value):
        assert decode(HEX, value) == Ok(value)


class TestModuleSource:
    def test_compiles_without_escape_warnings(self):
        source = Path(patterns.__file__).read_text()
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(source, patterns.__file__, "exec")
