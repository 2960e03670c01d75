"""
Tests for tessera.result.
"""

import pytest

from tessera import (
    Err,
    ErrorEntry,
    Ok,
    ResultError,
    fail,
    fail_with_errors,
    gather_fields,
    gather_items,
    merge,
    succeed,
)
from tessera.result import override_message


class TestOkErr:
    def test_succeed(self):
        result = succeed(42)
        assert isinstance(result, Ok)
        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == 42

    def test_fail(self):
        result = fail("expected a string", 10)
        assert isinstance(result, Err)
        assert result.errors == (ErrorEntry("expected a string", 10, ()),)

    def test_fail_with_path(self):
        result = fail("must be positive", -1, ["age"])
        assert result.errors[0].path == ("age",)

    def test_err_needs_errors(self):
        with pytest.raises(ValueError):
            Err(())

    def test_unwrap_err_raises(self):
        with pytest.raises(ResultError) as exc_info:
            fail("boom", None, ("a", 0)).unwrap()
        assert exc_info.value.errors[0].message == "boom"
        assert "a[0]: boom" in str(exc_info.value)

    def test_map_and_chain(self):
        assert succeed(2).map(lambda x: x * 3) == Ok(6)
        assert succeed(2).chain(lambda x: fail("odd", x)) == fail("odd", 2)
        err = fail("nope", 1)
        assert err.map(lambda x: x * 3) is err
        assert err.chain(lambda x: succeed(x)) is err

    def test_replace(self):
        assert succeed(True).replace("decoded") == Ok("decoded")
        err = fail("nope", 1)
        assert err.replace("decoded") is err

    def test_prepend_path(self):
        result = fail("bad", 1, ("zip",)).prepend_path(2).prepend_path("addresses")
        assert result.errors[0].path == ("addresses", 2, "zip")
        assert succeed(1).prepend_path("x") == Ok(1)

    def test_error_location(self):
        entry = ErrorEntry("bad", 1, ("user", "addresses", 2, "zip"))
        assert entry.location == "user.addresses[2].zip"
        assert str(entry) == "user.addresses[2].zip: bad"
        assert str(ErrorEntry("bad", 1)) == "bad"


class TestCombinators:
    def test_fail_with_errors(self):
        errors = [ErrorEntry("a", 1), ErrorEntry("b", 2)]
        assert fail_with_errors(errors).errors == tuple(errors)

    def test_merge_successes(self):
        assert merge(succeed(1), succeed("a"), lambda x, y: (x, y)) == Ok((1, "a"))

    def test_merge_keeps_all_errors(self):
        result = merge(fail("left", 1), fail("right", 2), lambda x, y: (x, y))
        assert [e.message for e in result.errors] == ["left", "right"]

    def test_merge_one_failure(self):
        result = merge(succeed(1), fail("right", 2), lambda x, y: (x, y))
        assert [e.message for e in result.errors] == ["right"]

    def test_gather_fields(self):
        assert gather_fields({"a": succeed(1), "b": succeed(2)}) == Ok({"a": 1, "b": 2})

    def test_gather_fields_prefixes_paths(self):
        result = gather_fields({"a": fail("x", 1), "b": succeed(2), "c": fail("y", 3, ("d",))})
        assert [e.path for e in result.errors] == [("a",), ("c", "d")]

    def test_gather_items(self):
        assert gather_items([succeed(1), succeed(2)]) == Ok([1, 2])
        result = gather_items([succeed(1), fail("x", 2)])
        assert result.errors[0].path == (1,)

    def test_override_message_only_at_this_level(self):
        result = fail_with_errors([ErrorEntry("inner", 1, ("a",)), ErrorEntry("outer", 2)])
        overridden = override_message(result, "custom")
        assert [e.message for e in overridden.errors] == ["inner", "custom"]
        assert override_message(result, None) is result
