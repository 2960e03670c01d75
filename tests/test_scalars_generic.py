"""
Tests for json, unknown, never and void.
"""

from datetime import date

import pytest

from tessera import MISSING, Err, InternalError, Ok, decode, encode, obj, scalars, validate


class TestJson:
    def test_json_values(self):
        value = {"a": [1, 2.5, "x", None, True], "b": {}}
        assert decode(scalars.json(), value) == Ok(value)
        assert encode(scalars.json(), value) == value

    def test_tuples_become_lists(self):
        assert decode(scalars.json(), {"a": (1, 2)}) == Ok({"a": [1, 2]})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), {1: "a"}, date(2020, 1, 1), [object()]])
    def test_not_json(self, value):
        assert isinstance(decode(scalars.json(), value), Err)
        assert isinstance(validate(scalars.json(), value), Err)

    def test_missing_field_is_null(self):
        assert decode(obj({"data": scalars.json()}), {}) == Ok({"data": None})


class TestUnknown:
    def test_anything_decodes(self):
        marker = object()
        assert decode(scalars.unknown(), marker).value is marker
        assert validate(scalars.unknown(), marker) == Ok(True)

    def test_encoding_is_best_effort(self):
        value = {"when": date(2020, 1, 2), "tags": ("a", "b"), "n": float("nan")}
        assert encode(scalars.unknown(), value) == {"when": "2020-01-02", "tags": ["a", "b"], "n": None}
        assert encode(scalars.unknown(), MISSING) is None


class TestNever:
    @pytest.mark.parametrize("value", [None, 1, "a"])
    def test_nothing_decodes(self, value):
        assert decode(scalars.never(), value).errors[0].message == "no value has type never"
        assert isinstance(validate(scalars.never(), value), Err)

    def test_encoding_is_an_internal_error(self):
        with pytest.raises(InternalError):
            encode(scalars.never(), 1)


class TestVoid:
    def test_null_or_missing(self):
        assert decode(scalars.void(), None) == Ok(None)
        assert decode(obj({"nothing": scalars.void()}), {}) == Ok({"nothing": None})
        assert decode(scalars.void(), 0).errors[0].message == "expected null"

    def test_encodes_as_null(self):
        assert encode(scalars.void(), None) is None
