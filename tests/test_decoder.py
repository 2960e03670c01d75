"""
Tests for tessera.decoder.
"""

import pytest

from tessera import (
    Err,
    Ok,
    array,
    boolean,
    decode,
    decode_without_validation,
    encode,
    enumeration,
    field,
    integer,
    literal,
    nullable,
    number,
    obj,
    optional,
    record,
    string,
    tuple_,
    union,
)

CASTING = {"typeCastingStrategy": "tryCasting"}
FIRST_ERROR = {"errorReportingStrategy": "stopAtFirstError"}


class TestScalars:
    def test_string(self):
        assert decode(string(), "hello") == Ok("hello")
        assert isinstance(decode(string(), 10), Err)

    def test_string_casting(self):
        assert decode(string(), 10, CASTING) == Ok("10")
        assert decode(string(), True, CASTING) == Ok("true")

    def test_number(self):
        assert decode(number(), 1.5) == Ok(1.5)
        assert isinstance(decode(number(), "1.5"), Err)

    def test_booleans_are_not_numbers(self):
        assert isinstance(decode(number(), True), Err)
        assert isinstance(decode(number(), False, CASTING), Err)

    def test_number_casting(self):
        assert decode(number(), "12", CASTING) == Ok(12)
        assert decode(number(), " 1.5 ", CASTING) == Ok(1.5)
        assert isinstance(decode(number(), "twelve", CASTING), Err)
        assert isinstance(decode(number(), "nan", CASTING), Err)

    def test_boolean(self):
        assert decode(boolean(), False) == Ok(False)
        assert isinstance(decode(boolean(), "true"), Err)
        assert decode(boolean(), "true", CASTING) == Ok(True)
        assert decode(boolean(), 0, CASTING) == Ok(False)

    def test_literal(self):
        assert decode(literal("a"), "a") == Ok("a")
        assert isinstance(decode(literal(1), True), Err)
        assert decode(literal(None), "null", CASTING) == Ok(None)

    def test_enum(self):
        colors = enumeration(["red", "green"])
        assert decode(colors, "red") == Ok("red")
        result = decode(colors, "blue")
        assert isinstance(result, Err)
        assert result.errors[0].message == "expected one of (red | green)"


class TestWrappers:
    def test_optional(self):
        assert decode(optional(string()), None) == Ok(None)
        assert decode(optional(string()), "a") == Ok("a")

    def test_nullable(self):
        assert decode(nullable(number()), None) == Ok(None)
        assert isinstance(decode(nullable(number()), "a"), Err)

    def test_array(self):
        assert decode(array(number()), [1, 2]) == Ok([1, 2])
        assert decode(array(number()), (1, 2)) == Ok([1, 2])
        assert isinstance(decode(array(number()), {"0": 1}), Err)

    def test_array_from_indexed_object(self):
        assert decode(array(number()), {"1": 2, "0": 1}, CASTING) == Ok([1, 2])
        assert isinstance(decode(array(number()), {"0": 1, "2": 3}, CASTING), Err)

    def test_array_error_paths(self):
        result = decode(array(number()), [1, "a", 3, "b"])
        assert isinstance(result, Err)
        assert [e.path for e in result.errors] == [(1,), (3,)]

    def test_array_stop_at_first_error(self):
        result = decode(array(number()), [1, "a", 3, "b"], FIRST_ERROR)
        assert [e.path for e in result.errors] == [(1,)]


class TestObjects:
    def test_valid(self, user_type, valid_user):
        assert decode(user_type, valid_user) == Ok(valid_user)

    def test_optional_field_absent_stays_absent(self, user_type, valid_user):
        result = decode(user_type, valid_user)
        assert "email" not in result.value

    def test_optional_field_holding_null_is_dropped(self):
        t = obj({"a": optional(string()), "b": nullable(string())})
        decoded = decode(t, {"a": None, "b": None})
        assert decoded == Ok({"b": None})
        assert decode(t, encode(t, decoded.value)) == decoded

    def test_missing_required_field(self, user_type, valid_user):
        del valid_user["name"]
        result = decode(user_type, valid_user)
        assert isinstance(result, Err)
        assert result.errors[0].path == ("name",)
        assert result.errors[0].message == "expected a string"

    def test_errors_accumulate_with_paths(self):
        point = obj({"x": number(), "y": number()})
        result = decode(point, {"x": "a", "y": "b"})
        assert isinstance(result, Err)
        assert [e.path for e in result.errors] == [("x",), ("y",)]

    def test_stop_at_first_error(self):
        point = obj({"x": number(), "y": number()})
        result = decode(point, {"x": "a", "y": "b"}, FIRST_ERROR)
        assert len(result.errors) == 1

    def test_nested_paths(self):
        t = obj({"user": obj({"addresses": array(obj({"zip": string()}))})})
        value = {"user": {"addresses": [{"zip": "1"}, {"zip": "2"}, {"zip": 3}]}}
        result = decode(t, value)
        assert result.errors[0].location == "user.addresses[2].zip"

    def test_extra_fields(self):
        t = obj({"a": number()})
        result = decode(t, {"a": 1, "b": 2})
        assert isinstance(result, Err)
        assert result.errors[0].message == "unexpected field"
        assert result.errors[0].path == ("b",)
        lenient = decode(t, {"a": 1, "b": 2}, {"fieldStrictness": "allowAdditionalFields"})
        assert lenient == Ok({"a": 1})

    def test_not_an_object(self):
        assert isinstance(decode(obj({}), []), Err)
        assert decode(obj({}), None, CASTING) == Ok({})

    def test_accept_missing_literal(self):
        t = obj({"kind": literal("error", accept_missing=True), "code": number()})
        assert decode(t, {"code": 1}) == Ok({"kind": "error", "code": 1})

    def test_sensitive_fields_decode_normally(self):
        t = obj({"secret": field(string(), sensitive=True)})
        assert decode(t, {"secret": "s"}) == Ok({"secret": "s"})


class TestTuples:
    def test_valid(self):
        pair = tuple_([string(), number()])
        assert decode(pair, ["a", 1]) == Ok(("a", 1))
        assert decode(pair, ("a", 1)) == Ok(("a", 1))

    def test_length(self):
        pair = tuple_([string(), number()])
        result = decode(pair, ["a"])
        assert result.errors[0].message == "expected a tuple of 2 items"
        assert isinstance(decode(pair, ["a", 1, 2]), Err)

    def test_element_paths(self):
        result = decode(tuple_([string(), number(), number()]), [1, 2, "x"])
        assert [e.path for e in result.errors] == [(0,), (2,)]

    def test_indexed_object_when_casting(self):
        pair = tuple_([string(), number()])
        assert decode(pair, {"0": "a", "1": 1}, CASTING) == Ok(("a", 1))
        assert isinstance(decode(pair, {"0": "a", "1": 1}), Err)


class TestRecords:
    def test_valid(self):
        scores = record(integer(minimum=0))
        assert decode(scores, {"alice": 3, "bob": 5}) == Ok({"alice": 3, "bob": 5})
        assert decode(scores, {}) == Ok({})

    def test_value_paths(self):
        result = decode(record(number()), {"a": 1, "b": "x", "c": "y"})
        assert [e.path for e in result.errors] == [("b",), ("c",)]
        assert len(decode(record(number()), {"b": "x", "c": "y"}, FIRST_ERROR).errors) == 1

    def test_validation_runs_on_values(self):
        result = decode(record(integer(minimum=0)), {"a": -1})
        assert result.errors[0].path == ("a",)

    def test_not_an_object(self):
        assert isinstance(decode(record(number()), [1, 2]), Err)
        assert isinstance(decode(record(number()), None), Err)


class TestUnions:
    def test_first_matching_variant(self):
        t = union({"num": number(), "str": string()})
        assert decode(t, 1) == Ok(1)
        assert decode(t, "a") == Ok("a")

    def test_variant_must_also_validate(self):
        t = union({"small": number(maximum=10), "text": string(), "big": number()})
        assert decode(t, 100) == Ok(100)

    def test_no_variant(self):
        t = union({"num": number(), "str": string()})
        result = decode(t, True)
        assert isinstance(result, Err)
        assert [e.message for e in result.errors] == ["expected a number", "expected a string"]


class TestDecodeThenValidate:
    def test_decode_runs_validation(self):
        assert isinstance(decode(string(min_length=3), "ab"), Err)
        assert decode_without_validation(string(min_length=3), "ab") == Ok("ab")

    def test_validation_options(self):
        t = obj({"x": number(minimum=0), "y": number(minimum=0)})
        result = decode(t, {"x": -1, "y": -1}, None, FIRST_ERROR)
        assert len(result.errors) == 1

    def test_custom_message(self):
        result = decode(integer(minimum=0).with_message("must be a natural number"), -3)
        assert result.errors[0].message == "must be a natural number"

    def test_custom_message_keeps_nested_messages(self):
        t = obj({"x": number()}, message="bad point")
        result = decode(t, {"x": "a"})
        assert result.errors[0].message == "expected a number"
        assert decode(t, 5).errors[0].message == "bad point"

    @pytest.mark.parametrize("value", [[], {}, None, 1.5])
    def test_integer_rejects(self, value):
        assert isinstance(decode(integer(), value), Err)
