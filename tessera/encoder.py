"""
Encoding: domain values -> JSON-compatible values.

`encode` trusts its input to be a valid value of the type; use
`encode_checked` when that is not guaranteed.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from . import validator
from .custom import run_closure
from .errors import InternalError
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
    DEFAULT_ENCODE_OPTIONS,
    EncodeOptions,
    ValidationOptions,
    resolve,
)
from .result import Ok, Result

logger = logging.getLogger(__name__)


def encode(
    type_: TypeLike,
    value: Any,
    options: EncodeOptions | Mapping[str, Any] | None = None,
) -> Any:
    """
    Encode a domain value.

    Under the `hide` strategy, sensitive types and sensitive object fields
    are encoded as None.

    Usage:
        password = string().as_sensitive()
        encode(password, "hunter2", {"sensitiveInformationStrategy": "hide"})  # None
    """
    return _encode(type_, value, resolve(EncodeOptions, options, DEFAULT_ENCODE_OPTIONS))


def encode_checked(
    type_: TypeLike,
    value: Any,
    encode_options: EncodeOptions | Mapping[str, Any] | None = None,
    validation_options: ValidationOptions | Mapping[str, Any] | None = None,
) -> Result[Any]:
    """Validate the value first, then encode it."""
    return validator.validate(type_, value, validation_options).map(
        lambda _: encode(type_, value, encode_options)
    )


def _encode(type_: TypeLike, value: Any, options: EncodeOptions) -> Any:
    concrete = concretise(type_)
    if concrete.sensitive and options.hide_sensitive:
        return None

    match concrete:
        case StringType() | NumberType() | BooleanType() | EnumType():
            return value
        case LiteralType(value=literal_value):
            return literal_value
        case OptionalType(wrapped=wrapped):
            return None if value is None or value is MISSING else _encode(wrapped, value, options)
        case NullableType(wrapped=wrapped):
            return None if value is None else _encode(wrapped, value, options)
        case ArrayType(wrapped=wrapped):
            return [_encode(wrapped, item, options) for item in value]
        case TupleType(elements=elements):
            return [_encode(element, item, options) for element, item in zip(elements, value)]
        case RecordType(wrapped=wrapped):
            return {key: _encode(wrapped, item, options) for key, item in value.items()}
        case ObjectType():
            return _encode_object(concrete, value, options)
        case UnionType():
            return _encode_union(concrete, value, options)
        case CustomType():
            return run_closure(concrete, "encoder", concrete.encoder, value, options, concrete.options)
    raise InternalError(
        f"Totality check failed when encoding a {type(concrete).__name__}, "
        "this should have never happened"
    )


def _encode_object(type_: ObjectType, value: Mapping[str, Any], options: EncodeOptions) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    for name, field in type_.fields.items():
        raw = value.get(name, MISSING)
        if is_optional(field.type) and raw is None:
            continue
        # Absent keys are skipped, except for literals that fill themselves in
        if raw is MISSING and not isinstance(concretise(field.type), LiteralType):
            continue
        if field.sensitive and options.hide_sensitive:
            encoded[name] = None
        elif not field.redact:
            encoded[name] = _encode(field.type, raw, DEFAULT_ENCODE_OPTIONS)
        else:
            encoded[name] = _encode(field.type, raw, options)
    return encoded


def _encode_union(type_: UnionType, value: Any, options: EncodeOptions) -> Any:
    for variant in type_.variants.values():
        if isinstance(validator.validate(variant, value), Ok):
            return _encode(variant, value, options)
    logger.error("No variant of union %s accepts the value to encode", type_.display_name)
    raise ValueError(
        f"Cannot encode value of type {type(value).__name__}: "
        f"no variant of union {type_.display_name} accepts it"
    )
