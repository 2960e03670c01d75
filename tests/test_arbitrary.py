"""
Property-based tests: generated values survive encode -> decode.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tessera import (
    Ok,
    TypeDefinitionError,
    arbitrary,
    array,
    boolean,
    custom,
    decode,
    encode,
    enumeration,
    integer,
    literal,
    nullable,
    number,
    obj,
    optional,
    record,
    scalars,
    string,
    succeed,
    tuple_,
    union,
    validate,
)

USER = obj(
    {
        "name": string(min_length=1, max_length=30),
        "age": integer(minimum=0, maximum=150),
        "score": number(exclusive_minimum=0, maximum=1),
        "active": boolean(),
        "role": enumeration(["admin", "member"]),
        "kind": literal("user"),
        "nickname": optional(string()),
        "alias": optional(nullable(string(max_length=10))),
        "location": tuple_([scalars.latitude(), scalars.longitude()]),
        "scores": record(integer(minimum=0)),
        "manager": nullable(string()),
        "tags": array(string(max_length=5), max_items=3),
        "contact": union({"email": scalars.email(), "phone": scalars.phone_number()}),
    }
)


def _tree():
    return TREE


TREE = obj({"value": integer(), "children": array(_tree)})

SCALARS = [
    scalars.email(),
    scalars.phone_number(),
    scalars.country_code(),
    scalars.locale(),
    scalars.uuid(),
    scalars.version(),
    scalars.jwt(),
    scalars.isbn(),
    scalars.rgb(),
    scalars.rgba(),
    scalars.mac(),
    scalars.ip(),
    scalars.port(),
    scalars.url(),
    scalars.latitude(),
    scalars.longitude(),
    scalars.datetime_(),
    scalars.timestamp(),
    scalars.date(),
    scalars.time(),
    scalars.timezone(),
    scalars.decimal(decimals=4),
    scalars.json(),
    scalars.unknown(),
    scalars.void(),
]


class TestRoundTrip:
    @given(arbitrary(USER))
    def test_object(self, value):
        assert decode(USER, encode(USER, value)) == Ok(value)

    @given(arbitrary(TREE, max_depth=4))
    def test_recursive(self, value):
        assert decode(TREE, encode(TREE, value)) == Ok(value)

    @pytest.mark.parametrize("scalar", SCALARS, ids=lambda t: t.name)
    @settings(max_examples=25)
    @given(data=st.data())
    def test_scalars(self, scalar, data):
        value = data.draw(arbitrary(scalar))
        assert decode(scalar, encode(scalar, value)) == Ok(value)


class TestGeneratedValuesValidate:
    @given(arbitrary(USER))
    def test_valid(self, value):
        assert validate(USER, value) == Ok(True)

    @given(arbitrary(number(minimum=1, maximum=2, multiple_of=0.5)))
    def test_number_constraints(self, value):
        assert value in (1, 1.5, 2)


class TestDepth:
    @given(arbitrary(obj({"a": optional(nullable(string()))})))
    def test_present_optional_fields_hold_values(self, value):
        assert value.get("a", "absent") is not None

    @given(arbitrary(record(number()), max_depth=0))
    def test_depth_exhausted_record(self, value):
        assert value == {}

    @given(arbitrary(optional(string()), max_depth=0))
    def test_depth_exhausted_optional(self, value):
        assert value is None

    @given(arbitrary(array(number()), max_depth=0))
    def test_depth_exhausted_array(self, value):
        assert value == []


class TestMissingGenerator:
    def test_custom_without_arbitrary(self):
        t = custom("opaque", lambda *_: None, lambda v, *_: succeed(v), lambda *_: succeed(True))
        with pytest.raises(TypeDefinitionError):
            arbitrary(t)
