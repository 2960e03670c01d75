"""
Validation: checks the invariants of values that already have the right shape.

`validate` never changes its input. It re-checks the structure it relies on,
so it can also be used on values that never went through `decode`.

Usage:
    validate(string(min_length=3), "ab")
    # Err((ErrorEntry("string shorter than min length (3)", "ab", ()),))
"""

from __future__ import annotations

import itertools
import math
from typing import Any, Callable, Iterable, Mapping, Sequence

from .custom import run_closure
from .errors import InternalError
from .lib.values import is_integral, is_multiple_of, is_number, same_literal
from .model import (
    MISSING,
    ArrayType,
    BooleanType,
    CustomType,
    EnumType,
    LiteralType,
    NullableType,
    NumberType,
    ObjectType,
    OptionalType,
    RecordType,
    StringType,
    TupleType,
    TypeLike,
    UnionType,
    concretise,
    is_optional,
)
from .options import DEFAULT_VALIDATION_OPTIONS, ValidationOptions, resolve
from .result import Err, ErrorEntry, Ok, Result, fail, override_message, succeed

Check = Callable[[], "Err | None"]


def validate(
    type_: TypeLike,
    value: Any,
    options: ValidationOptions | Mapping[str, Any] | None = None,
) -> Result[bool]:
    """
    Check a domain value against its type.

    Returns:
        Ok(True) if every invariant holds
        Err(errors) otherwise; with `stopAtFirstError` only the first one
    """
    return _validate(type_, value, resolve(ValidationOptions, options, DEFAULT_VALIDATION_OPTIONS))


def _validate(type_: TypeLike, value: Any, options: ValidationOptions) -> Result[bool]:
    concrete = concretise(type_)
    match concrete:
        case StringType():
            result = _validate_string(concrete, value, options)
        case NumberType():
            result = _validate_number(concrete, value, options)
        case BooleanType():
            result = succeed(True) if isinstance(value, bool) else fail("expected a boolean", value)
        case LiteralType(value=expected, accept_missing=accept_missing):
            result = (
                succeed(True)
                if same_literal(value, expected) or (value is MISSING and accept_missing)
                else fail(f"expected literal ({expected!r})", value)
            )
        case EnumType(variants=variants):
            result = (
                succeed(True)
                if isinstance(value, str) and value in variants
                else fail(f"expected one of ({' | '.join(variants)})", value)
            )
        case OptionalType(wrapped=wrapped):
            result = succeed(True) if value is None or value is MISSING else _validate(wrapped, value, options)
        case NullableType(wrapped=wrapped):
            result = succeed(True) if value is None else _validate(wrapped, value, options)
        case ArrayType():
            result = _validate_array(concrete, value, options)
        case TupleType():
            result = _validate_tuple(concrete, value, options)
        case RecordType():
            result = _validate_record(concrete, value, options)
        case ObjectType():
            result = _validate_object(concrete, value, options)
        case UnionType():
            result = _validate_union(concrete, value, options)
        case CustomType():
            result = run_closure(concrete, "validator", concrete.validator, value, options, concrete.options)
        case _:
            raise InternalError(
                f"Totality check failed when validating a {type(concrete).__name__}, "
                "this should have never happened"
            )
    return override_message(result, concrete.message)


def _run_checks(checks: Sequence[Check], options: ValidationOptions) -> Result[bool]:
    """Run assertion checks in order, collecting failures."""
    errors: list[ErrorEntry] = []
    for check in checks:
        failure = check()
        if failure is None:
            continue
        errors.extend(failure.errors)
        if options.stop_at_first_error:
            break
    return Err(tuple(errors)) if errors else succeed(True)


def _validate_string(type_: StringType, value: Any, options: ValidationOptions) -> Result[bool]:
    if not isinstance(value, str):
        return fail("expected a string", value)

    def max_length() -> Err | None:
        if type_.max_length is not None and len(value) > type_.max_length:
            return fail(f"string longer than max length ({type_.max_length})", value)
        return None

    def min_length() -> Err | None:
        if type_.min_length is not None and len(value) < type_.min_length:
            return fail(f"string shorter than min length ({type_.min_length})", value)
        return None

    def regex() -> Err | None:
        if type_.regex is not None and not type_.regex.search(value):
            return fail(f"string regex mismatch ({type_.regex.pattern})", value)
        return None

    return _run_checks((max_length, min_length, regex), options)


def _validate_number(type_: NumberType, value: Any, options: ValidationOptions) -> Result[bool]:
    if not is_number(value) or (isinstance(value, float) and math.isnan(value)):
        return fail("expected a number", value)

    def integer() -> Err | None:
        if type_.is_integer and not is_integral(value):
            return fail("number must be an integer", value)
        return None

    def maximum() -> Err | None:
        if type_.maximum is not None and value > type_.maximum:
            return fail(f"number must be less than or equal to {type_.maximum}", value)
        return None

    def exclusive_maximum() -> Err | None:
        if type_.exclusive_maximum is not None and value >= type_.exclusive_maximum:
            return fail(f"number must be less than {type_.exclusive_maximum}", value)
        return None

    def minimum() -> Err | None:
        if type_.minimum is not None and value < type_.minimum:
            return fail(f"number must be greater than or equal to {type_.minimum}", value)
        return None

    def exclusive_minimum() -> Err | None:
        if type_.exclusive_minimum is not None and value <= type_.exclusive_minimum:
            return fail(f"number must be greater than {type_.exclusive_minimum}", value)
        return None

    def multiple_of() -> Err | None:
        if type_.multiple_of is not None and not is_multiple_of(value, type_.multiple_of):
            return fail(f"number must be a multiple of {type_.multiple_of}", value)
        return None

    return _run_checks(
        (integer, maximum, exclusive_maximum, minimum, exclusive_minimum, multiple_of), options
    )


def _validate_array(type_: ArrayType, value: Any, options: ValidationOptions) -> Result[bool]:
    if not isinstance(value, (list, tuple)):
        return fail("expected an array", value)

    def max_items() -> Err | None:
        if type_.max_items is not None and len(value) > type_.max_items:
            return fail(f"array must have at most {type_.max_items} items", value)
        return None

    def min_items() -> Err | None:
        if type_.min_items is not None and len(value) < type_.min_items:
            return fail(f"array must have at least {type_.min_items} items", value)
        return None

    result = _run_checks((max_items, min_items), options)
    if isinstance(result, Err) and options.stop_at_first_error:
        return result

    errors: list[ErrorEntry] = list(result.errors) if isinstance(result, Err) else []
    for index, item in enumerate(value):
        item_result = _validate(type_.wrapped, item, options)
        if isinstance(item_result, Ok):
            continue
        errors.extend(item_result.prepend_path(index).errors)
        if options.stop_at_first_error:
            break
    return Err(tuple(errors)) if errors else succeed(True)


def _validate_entries(
    entries: Iterable[tuple[Any, Any]], types: Iterable[TypeLike], options: ValidationOptions
) -> Result[bool]:
    """Validate (path segment, value) pairs against the matching types."""
    errors: list[ErrorEntry] = []
    for (segment, item), item_type in zip(entries, types):
        result = _validate(item_type, item, options)
        if isinstance(result, Ok):
            continue
        errors.extend(result.prepend_path(segment).errors)
        if options.stop_at_first_error:
            break
    return Err(tuple(errors)) if errors else succeed(True)


def _validate_tuple(type_: TupleType, value: Any, options: ValidationOptions) -> Result[bool]:
    if not isinstance(value, (list, tuple)):
        return fail("expected an array", value)
    if len(value) != len(type_.elements):
        return fail(f"expected a tuple of {len(type_.elements)} items", value)
    return _validate_entries(enumerate(value), type_.elements, options)


def _validate_record(type_: RecordType, value: Any, options: ValidationOptions) -> Result[bool]:
    if not isinstance(value, Mapping):
        return fail("expected an object", value)
    if not all(isinstance(key, str) for key in value):
        return fail("expected an object with string keys", value)
    return _validate_entries(value.items(), itertools.repeat(type_.wrapped), options)


def _validate_object(type_: ObjectType, value: Any, options: ValidationOptions) -> Result[bool]:
    if not isinstance(value, Mapping):
        return fail("expected an object", value)

    errors: list[ErrorEntry] = []
    for name, field in type_.fields.items():
        raw = value.get(name, MISSING)
        if raw is MISSING and is_optional(field.type):
            continue
        result = _validate(field.type, raw, options)
        if isinstance(result, Ok):
            continue
        errors.extend(result.prepend_path(name).errors)
        if options.stop_at_first_error:
            break
    return Err(tuple(errors)) if errors else succeed(True)


def _validate_union(type_: UnionType, value: Any, options: ValidationOptions) -> Result[bool]:
    for variant in type_.variants.values():
        if isinstance(_validate(variant, value, options), Ok):
            return succeed(True)
    return fail("value does not pass any of the variant checks", value)
