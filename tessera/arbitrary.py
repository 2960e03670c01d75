"""
Example generation for any tessera type.

`arbitrary` turns a type into a hypothesis strategy that draws valid domain
values, which makes round trips easy to test:

    @given(arbitrary(user))
    def test_round_trip(value):
        assert decode(user, encode(user, value)) == Ok(value)
"""

from __future__ import annotations

import math
from typing import Any

from hypothesis import strategies as st

from .errors import TypeDefinitionError
from .model import (
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
from .validator import validate

DEFAULT_MAX_DEPTH = 3

# Unbounded arrays and strings are kept short so examples stay readable
MAX_GENERATED_ITEMS = 5
MAX_GENERATED_LENGTH = 20


def arbitrary(type_: TypeLike, max_depth: int = DEFAULT_MAX_DEPTH) -> st.SearchStrategy[Any]:
    """
    Build a strategy drawing valid values of `type_`.

    `max_depth` bounds nesting: past it, optional and nullable values are
    None and arrays are as short as allowed, so recursive types terminate.
    """
    concrete = concretise(type_)
    match concrete:
        case StringType():
            return _strings(concrete)
        case NumberType():
            return _numbers(concrete)
        case BooleanType():
            return st.booleans()
        case LiteralType(value=value):
            return st.just(value)
        case EnumType(variants=variants):
            return st.sampled_from(variants)
        case OptionalType(wrapped=wrapped) | NullableType(wrapped=wrapped):
            if max_depth <= 0:
                return st.none()
            return st.none() | arbitrary(wrapped, max_depth - 1)
        case ArrayType():
            return _arrays(concrete, max_depth)
        case TupleType(elements=elements):
            return st.tuples(*(arbitrary(element, max_depth - 1) for element in elements))
        case RecordType(wrapped=wrapped):
            if max_depth <= 0:
                return st.just({})
            return st.dictionaries(
                st.text(max_size=MAX_GENERATED_LENGTH),
                arbitrary(wrapped, max_depth - 1),
                max_size=MAX_GENERATED_ITEMS,
            )
        case ObjectType():
            return _objects(concrete, max_depth)
        case UnionType(variants=variants):
            return st.one_of(*(arbitrary(variant, max_depth - 1) for variant in variants.values()))
        case CustomType():
            if concrete.arbitrary is None:
                raise TypeDefinitionError(
                    f"Custom type {concrete.display_name!r} has no example generator"
                )
            return concrete.arbitrary(max_depth, concrete.options)
    raise TypeDefinitionError(f"Cannot generate examples for {type(concrete).__name__}")


def _strings(type_: StringType) -> st.SearchStrategy[str]:
    min_size = type_.min_length or 0
    max_size = type_.max_length if type_.max_length is not None else max(min_size, MAX_GENERATED_LENGTH)
    if type_.regex is None:
        return st.text(min_size=min_size, max_size=max_size)
    return st.from_regex(type_.regex).filter(lambda s: min_size <= len(s) <= max_size)


def _numbers(type_: NumberType) -> st.SearchStrategy[int | float]:
    if type_.multiple_of is not None:
        step = type_.multiple_of
        lower = _tighter(type_.minimum, type_.exclusive_minimum, max)
        upper = _tighter(type_.maximum, type_.exclusive_maximum, min)
        strategy: st.SearchStrategy[Any] = st.integers(
            min_value=math.ceil(lower / step) if lower is not None else -(10**6),
            max_value=math.floor(upper / step) if upper is not None else 10**6,
        ).map(lambda n: n * step)
    elif type_.is_integer:
        lower = _integer_bound(type_.minimum, type_.exclusive_minimum, math.ceil, 1)
        upper = _integer_bound(type_.maximum, type_.exclusive_maximum, math.floor, -1)
        strategy = st.integers(min_value=lower, max_value=upper)
    else:
        strategy = st.floats(
            min_value=_tighter(type_.minimum, type_.exclusive_minimum, max),
            max_value=_tighter(type_.maximum, type_.exclusive_maximum, min),
            exclude_min=_excludes(type_.minimum, type_.exclusive_minimum, max),
            exclude_max=_excludes(type_.maximum, type_.exclusive_maximum, min),
            allow_nan=False,
            allow_infinity=False,
        )
    return strategy.filter(lambda n: validate(type_, n).is_ok())


def _integer_bound(inclusive: float | None, exclusive: float | None, rounding: Any, step: int) -> int | None:
    candidates = []
    if inclusive is not None:
        candidates.append(rounding(inclusive))
    if exclusive is not None:
        # The nearest integer strictly past the exclusive bound
        candidates.append(math.floor(exclusive) + 1 if step > 0 else math.ceil(exclusive) - 1)
    if not candidates:
        return None
    return max(candidates) if step > 0 else min(candidates)


def _tighter(inclusive: float | None, exclusive: float | None, pick: Any) -> float | None:
    bounds = [bound for bound in (inclusive, exclusive) if bound is not None]
    return pick(bounds) if bounds else None


def _excludes(inclusive: float | None, exclusive: float | None, pick: Any) -> bool:
    if exclusive is None:
        return False
    return inclusive is None or pick(inclusive, exclusive) == exclusive


def _arrays(type_: ArrayType, max_depth: int) -> st.SearchStrategy[list[Any]]:
    min_size = type_.min_items or 0
    if max_depth <= 0 and min_size == 0:
        return st.just([])
    max_size = type_.max_items if type_.max_items is not None else min_size + MAX_GENERATED_ITEMS
    if max_depth <= 0:
        max_size = min_size
    return st.lists(arbitrary(type_.wrapped, max_depth - 1), min_size=min_size, max_size=max_size)


def _objects(type_: ObjectType, max_depth: int) -> st.SearchStrategy[dict[str, Any]]:
    required: dict[str, st.SearchStrategy[Any]] = {}
    optional: dict[str, st.SearchStrategy[Any]] = {}
    for name, field in type_.fields.items():
        if is_optional(field.type):
            # Decoding drops optional fields holding null, so present ones carry a value
            if max_depth > 0:
                wrapped = arbitrary(concretise(field.type).wrapped, max_depth - 1)
                optional[name] = wrapped.filter(lambda value: value is not None)
            continue
        required[name] = arbitrary(field.type, max_depth - 1)
    return st.fixed_dictionaries(required, optional=optional)
