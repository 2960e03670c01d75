"""
Decoding: untrusted input -> domain values.

`decode` runs structural decoding and then validation of the decoded value.
`decode_without_validation` only does the first half; custom decoders that
delegate to a built-in type use it.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from . import validator
from .custom import run_closure
from .errors import InternalError
from .lib.values import is_number, same_literal
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
from .options import (
    DEFAULT_DECODE_OPTIONS,
    DecodeOptions,
    FieldStrictness,
    ValidationOptions,
    resolve,
)
from .result import Err, ErrorEntry, Ok, Result, fail, override_message, succeed

logger = logging.getLogger(__name__)


def decode(
    type_: TypeLike,
    value: Any,
    decode_options: DecodeOptions | Mapping[str, Any] | None = None,
    validation_options: ValidationOptions | Mapping[str, Any] | None = None,
) -> Result[Any]:
    """
    Decode a value and validate the result.

    Args:
        type_: The type describing the expected value
        value: Untrusted input, typically parsed JSON
        decode_options: DecodeOptions or a mapping of its fields
        validation_options: ValidationOptions or a mapping of its fields

    Returns:
        Ok(decoded value) if both steps pass
        Err(errors) with the errors of the first failing step

    Usage:
        decode(number(), "12", {"typeCastingStrategy": "tryCasting"})  # Ok(12)
    """
    result = decode_without_validation(type_, value, decode_options).chain(
        lambda decoded: validator.validate(type_, decoded, validation_options).replace(decoded)
    )
    if isinstance(result, Err):
        logger.debug(
            "Decoding %s failed with %d error(s)",
            concretise(type_).display_name,
            len(result.errors),
        )
    return result


def decode_without_validation(
    type_: TypeLike,
    value: Any,
    options: DecodeOptions | Mapping[str, Any] | None = None,
) -> Result[Any]:
    return _decode(type_, value, resolve(DecodeOptions, options, DEFAULT_DECODE_OPTIONS))


def _decode(type_: TypeLike, value: Any, options: DecodeOptions) -> Result[Any]:
    concrete = concretise(type_)
    match concrete:
        case StringType():
            result = _decode_string(value, options)
        case NumberType():
            result = _decode_number(value, options)
        case BooleanType():
            result = _decode_boolean(value, options)
        case LiteralType():
            result = _decode_literal(concrete, value, options)
        case EnumType(variants=variants):
            result = (
                succeed(value)
                if isinstance(value, str) and value in variants
                else fail(f"expected one of ({' | '.join(variants)})", value)
            )
        case OptionalType(wrapped=wrapped):
            result = succeed(None) if value is None or value is MISSING else _decode(wrapped, value, options)
        case NullableType(wrapped=wrapped):
            if value is None or (value is MISSING and options.try_casting):
                result = succeed(None)
            else:
                result = _decode(wrapped, value, options)
        case ArrayType():
            result = _decode_array(concrete, value, options)
        case TupleType():
            result = _decode_tuple(concrete, value, options)
        case RecordType():
            result = _decode_record(concrete, value, options)
        case ObjectType():
            result = _decode_object(concrete, value, options)
        case UnionType():
            result = _decode_union(concrete, value, options)
        case CustomType():
            result = run_closure(concrete, "decoder", concrete.decoder, value, options, concrete.options)
        case _:
            raise InternalError(
                f"Totality check failed when decoding a {type(concrete).__name__}, "
                "this should have never happened"
            )
    return override_message(result, concrete.message)


def _decode_string(value: Any, options: DecodeOptions) -> Result[str]:
    if isinstance(value, str):
        return succeed(value)
    if options.try_casting and isinstance(value, bool):
        return succeed("true" if value else "false")
    if options.try_casting and is_number(value):
        return succeed(str(value))
    return fail("expected a string", value)


def number_from_string(text: str) -> Result[int | float]:
    try:
        return succeed(int(text))
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return fail("expected a number", text)
    return fail("expected a number", text) if math.isnan(number) else succeed(number)


def _decode_number(value: Any, options: DecodeOptions) -> Result[int | float]:
    if is_number(value):
        return succeed(value)
    if options.try_casting and isinstance(value, str):
        return number_from_string(value.strip())
    return fail("expected a number", value)


def _decode_boolean(value: Any, options: DecodeOptions) -> Result[bool]:
    if isinstance(value, bool):
        return succeed(value)
    if options.try_casting:
        if value == "true":
            return succeed(True)
        if value == "false":
            return succeed(False)
        if is_number(value):
            return succeed(value != 0)
    return fail("expected a boolean", value)


def _decode_literal(type_: LiteralType, value: Any, options: DecodeOptions) -> Result[Any]:
    if value is MISSING and type_.accept_missing:
        return succeed(type_.value)
    if same_literal(value, type_.value):
        return succeed(type_.value)
    if options.try_casting and type_.value is None and value == "null":
        return succeed(None)
    return fail(f"expected literal ({type_.value!r})", value)


def _decode_array(type_: ArrayType, value: Any, options: DecodeOptions) -> Result[list[Any]]:
    if isinstance(value, (list, tuple)):
        return _decode_items(type_, value, options)
    if options.try_casting and isinstance(value, Mapping):
        items = _mapping_as_items(value)
        if items is not None:
            return _decode_items(type_, items, options)
    return fail("expected an array", value)


def _mapping_as_items(mapping: Mapping[Any, Any]) -> list[Any] | None:
    """Values of {"0": a, "1": b, ...} in key order, if keys are exactly 0..n-1."""
    try:
        indexed = {int(key): item for key, item in mapping.items()}
    except (TypeError, ValueError):
        return None
    if sorted(indexed) != list(range(len(indexed))):
        return None
    return [indexed[i] for i in range(len(indexed))]


def _decode_items(type_: ArrayType, items: Any, options: DecodeOptions) -> Result[list[Any]]:
    decoded: list[Any] = []
    errors: list[ErrorEntry] = []
    for index, item in enumerate(items):
        result = _decode(type_.wrapped, item, options)
        if isinstance(result, Ok):
            decoded.append(result.value)
            continue
        errors.extend(result.prepend_path(index).errors)
        if options.stop_at_first_error:
            break
    return Err(tuple(errors)) if errors else succeed(decoded)


def _decode_tuple(type_: TupleType, value: Any, options: DecodeOptions) -> Result[tuple[Any, ...]]:
    items = value if isinstance(value, (list, tuple)) else None
    if items is None and options.try_casting and isinstance(value, Mapping):
        items = _mapping_as_items(value)
    if items is None:
        return fail("expected an array", value)
    if len(items) != len(type_.elements):
        return fail(f"expected a tuple of {len(type_.elements)} items", value)

    decoded: list[Any] = []
    errors: list[ErrorEntry] = []
    for index, (element, item) in enumerate(zip(type_.elements, items)):
        result = _decode(element, item, options)
        if isinstance(result, Ok):
            decoded.append(result.value)
            continue
        errors.extend(result.prepend_path(index).errors)
        if options.stop_at_first_error:
            break
    return Err(tuple(errors)) if errors else succeed(tuple(decoded))


def _decode_record(type_: RecordType, value: Any, options: DecodeOptions) -> Result[dict[str, Any]]:
    if not isinstance(value, Mapping):
        return fail("expected an object", value)

    decoded: dict[str, Any] = {}
    errors: list[ErrorEntry] = []
    for key, item in value.items():
        if not isinstance(key, str):
            result: Result[Any] = fail("expected a string key", key)
        else:
            result = _decode(type_.wrapped, item, options)
        if isinstance(result, Ok):
            decoded[key] = result.value
            continue
        errors.extend(result.prepend_path(key).errors)
        if options.stop_at_first_error:
            break
    return Err(tuple(errors)) if errors else succeed(decoded)


def _decode_object(type_: ObjectType, value: Any, options: DecodeOptions) -> Result[dict[str, Any]]:
    if value is None and options.try_casting:
        value = {}
    if not isinstance(value, Mapping):
        return fail("expected an object", value)

    decoded: dict[str, Any] = {}
    errors: list[ErrorEntry] = []
    for name, field in type_.fields.items():
        raw = value.get(name, MISSING)
        optional_field = is_optional(field.type)
        if raw is MISSING and optional_field:
            continue
        result = _decode(field.type, raw, options)
        if isinstance(result, Ok):
            # An optional field holding null is the same as an absent one
            if not (optional_field and result.value is None):
                decoded[name] = result.value
            continue
        errors.extend(result.prepend_path(name).errors)
        if options.stop_at_first_error:
            return Err(tuple(errors))

    if options.field_strictness is FieldStrictness.EXPECT_EXACT_FIELDS:
        for key, extra in value.items():
            if key in type_.fields:
                continue
            errors.append(ErrorEntry("unexpected field", extra, (key,)))
            if options.stop_at_first_error:
                break

    return Err(tuple(errors)) if errors else succeed(decoded)


def _decode_union(type_: UnionType, value: Any, options: DecodeOptions) -> Result[Any]:
    validation_options = ValidationOptions(error_reporting_strategy=options.error_reporting_strategy)
    errors: list[ErrorEntry] = []
    for variant in type_.variants.values():
        result = _decode(variant, value, options).chain(
            lambda decoded, variant=variant: validator.validate(
                variant, decoded, validation_options
            ).replace(decoded)
        )
        if isinstance(result, Ok):
            return result
        errors.extend(result.errors)
    return Err(tuple(errors))

