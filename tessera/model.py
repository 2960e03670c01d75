"""
Type definitions for tessera.

Every type is an immutable dataclass node. Nodes compose into a graph that the
decode/validate/encode dispatchers walk, and that adapters can introspect
through `kind`, the option attributes, `children()` and `walk()`.

Usage:
    from tessera import model as t

    user = t.obj(
        {
            "name": t.string(min_length=1),
            "age": t.integer(minimum=0),
            "email": t.optional(t.string()),
            "password": t.field(t.string(), sensitive=True),
            "tags": t.array(t.string()),
        }
    )
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field as dataclass_field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Iterator, Mapping, Union

from .errors import TypeDefinitionError
from .lib.values import is_integral


class Kind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LITERAL = "literal"
    ENUM = "enum"
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    ARRAY = "array"
    TUPLE = "tuple"
    RECORD = "record"
    OBJECT = "object"
    UNION = "union"
    CUSTOM = "custom"


class Mutability(str, Enum):
    IMMUTABLE = "immutable"
    MUTABLE = "mutable"


class Missing(Enum):
    """
    Sentinel for a key that is absent from its object.

    Plays the part of the wire's `undefined`: optional types accept it,
    everything else reports it as the offending value.
    """

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = Missing.MISSING


@dataclass(frozen=True, slots=True, kw_only=True)
class Type:
    """
    Base of every type node.

    Options shared by every kind:
        name: display name, used in diagnostics and by schema adapters
        description: free text for documentation
        sensitive: encode as None under the `hide` strategy
        message: replaces the message of errors raised at this level
    """

    kind: ClassVar[Kind]

    name: str | None = None
    description: str | None = None
    sensitive: bool = False
    message: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.kind.value

    def optional(self) -> OptionalType:
        return OptionalType(self)

    def nullable(self) -> NullableType:
        return NullableType(self)

    def array(self, min_items: int | None = None, max_items: int | None = None) -> ArrayType:
        return ArrayType(self, min_items=min_items, max_items=max_items)

    def as_sensitive(self) -> Type:
        return replace(self, sensitive=True)

    def named(self, name: str) -> Type:
        return replace(self, name=name)

    def described(self, description: str) -> Type:
        return replace(self, description=description)

    def with_message(self, message: str) -> Type:
        """Return new type with custom error message."""
        return replace(self, message=message)


TypeLike = Union[Type, Callable[[], Type]]


def concretise(type_: TypeLike) -> Type:
    """Resolve a lazily defined type (a zero-argument callable) to its node."""
    if isinstance(type_, Type):
        return type_
    if callable(type_):
        resolved = type_()
        if isinstance(resolved, Type):
            return resolved
        raise TypeDefinitionError(
            f"Lazy type returned {type(resolved).__name__}, expected a Type"
        )
    raise TypeDefinitionError(f"Cannot use {type(type_).__name__} as a type")


def _check_length_bounds(what: str, lower: int | None, upper: int | None) -> None:
    for label, bound in (("minimum", lower), ("maximum", upper)):
        if bound is None:
            continue
        if not isinstance(bound, int) or isinstance(bound, bool):
            raise TypeDefinitionError(f"The {label} {what} ({bound}) must be an integer")
        if bound < 0:
            raise TypeDefinitionError(f"The {label} {what} ({bound}) cannot be negative")
    if lower is not None and upper is not None and lower > upper:
        raise TypeDefinitionError(
            f"The minimum {what} ({lower}) should be lower than the maximum {what} ({upper})"
        )


@dataclass(frozen=True, slots=True)
class StringType(Type):
    kind: ClassVar[Kind] = Kind.STRING

    min_length: int | None = None
    max_length: int | None = None
    regex: re.Pattern[str] | None = None

    def __post_init__(self) -> None:
        _check_length_bounds("length", self.min_length, self.max_length)
        if isinstance(self.regex, str):
            object.__setattr__(self, "regex", re.compile(self.regex))


@dataclass(frozen=True, slots=True)
class NumberType(Type):
    kind: ClassVar[Kind] = Kind.NUMBER

    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: float | None = None
    exclusive_maximum: float | None = None
    multiple_of: float | None = None
    is_integer: bool = False

    def __post_init__(self) -> None:
        lower = _tightest(self.minimum, self.exclusive_minimum, max)
        upper = _tightest(self.maximum, self.exclusive_maximum, min)
        if lower is not None and upper is not None:
            excluded = lower == self.exclusive_minimum or upper == self.exclusive_maximum
            if lower > upper:
                raise TypeDefinitionError(
                    f"Lower bound ({lower}) must be lower or equal to the upper bound ({upper})"
                )
            if excluded and lower == upper:
                raise TypeDefinitionError(
                    f"Lower bound ({lower}) cannot be equal to upper bound ({upper})"
                )
        if self.is_integer:
            for bound in (self.minimum, self.maximum, self.exclusive_minimum, self.exclusive_maximum):
                if bound is not None and not is_integral(bound):
                    raise TypeDefinitionError(
                        "On integer types lower bound and upper bound must be integer numbers"
                    )
        if self.multiple_of is not None and self.multiple_of <= 0:
            raise TypeDefinitionError(f"multiple_of ({self.multiple_of}) must be positive")


def _tightest(inclusive: float | None, exclusive: float | None, pick: Callable) -> float | None:
    if inclusive is None:
        return exclusive
    if exclusive is None:
        return inclusive
    return pick(inclusive, exclusive)


@dataclass(frozen=True, slots=True)
class BooleanType(Type):
    kind: ClassVar[Kind] = Kind.BOOLEAN


@dataclass(frozen=True, slots=True)
class LiteralType(Type):
    """
    A single accepted value.

    With `accept_missing`, an absent key decodes to the literal itself; this
    models fields that always carry a fixed value, like an error message.
    """

    kind: ClassVar[Kind] = Kind.LITERAL

    value: str | int | float | bool | None
    accept_missing: bool = False


@dataclass(frozen=True, slots=True)
class EnumType(Type):
    kind: ClassVar[Kind] = Kind.ENUM

    variants: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "variants", tuple(self.variants))
        if not self.variants:
            raise TypeDefinitionError("An enumeration needs at least one variant")


@dataclass(frozen=True, slots=True)
class OptionalType(Type):
    kind: ClassVar[Kind] = Kind.OPTIONAL

    wrapped: TypeLike


@dataclass(frozen=True, slots=True)
class NullableType(Type):
    kind: ClassVar[Kind] = Kind.NULLABLE

    wrapped: TypeLike


@dataclass(frozen=True, slots=True)
class ArrayType(Type):
    kind: ClassVar[Kind] = Kind.ARRAY

    wrapped: TypeLike
    min_items: int | None = None
    max_items: int | None = None

    def __post_init__(self) -> None:
        _check_length_bounds("number of items", self.min_items, self.max_items)


@dataclass(frozen=True, slots=True)
class TupleType(Type):
    """A fixed-length array whose items each have their own type."""

    kind: ClassVar[Kind] = Kind.TUPLE

    elements: tuple[TypeLike, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))
        if not self.elements:
            raise TypeDefinitionError("A tuple needs at least one element")


@dataclass(frozen=True, slots=True)
class RecordType(Type):
    """An object with arbitrary string keys, all holding values of `wrapped`."""

    kind: ClassVar[Kind] = Kind.RECORD

    wrapped: TypeLike


@dataclass(frozen=True, slots=True)
class Field:
    """
    An object field with its own annotations.

    sensitive: encode the field as None under the `hide` strategy
    redact: when False, nothing below this field is ever hidden
    """

    type: TypeLike
    description: str | None = None
    sensitive: bool = False
    redact: bool = True


@dataclass(frozen=True, slots=True)
class ObjectType(Type):
    kind: ClassVar[Kind] = Kind.OBJECT

    fields: Mapping[str, Field]
    mutability: Mutability = Mutability.IMMUTABLE

    def __post_init__(self) -> None:
        normalized: dict[str, Field] = {}
        for name, value in self.fields.items():
            if not isinstance(name, str):
                raise TypeDefinitionError(f"Field names must be strings, got {name!r}")
            normalized[name] = value if isinstance(value, Field) else Field(value)
        object.__setattr__(self, "fields", MappingProxyType(normalized))
        object.__setattr__(self, "mutability", Mutability(self.mutability))

    def field_type(self, name: str) -> Type:
        return concretise(self.fields[name].type)

    def immutable(self) -> ObjectType:
        return replace(self, mutability=Mutability.IMMUTABLE)

    def mutable(self) -> ObjectType:
        return replace(self, mutability=Mutability.MUTABLE)


@dataclass(frozen=True, slots=True)
class UnionType(Type):
    kind: ClassVar[Kind] = Kind.UNION

    variants: Mapping[str, TypeLike]

    def __post_init__(self) -> None:
        if not self.variants:
            raise TypeDefinitionError("A union needs at least one variant")
        object.__setattr__(self, "variants", MappingProxyType(dict(self.variants)))


@dataclass(frozen=True, slots=True)
class CustomType(Type):
    """
    A scalar kind defined by its own closures.

    Built with `tessera.custom.custom`; see there for the closure contract.
    """

    kind: ClassVar[Kind] = Kind.CUSTOM

    encoder: Callable[..., Any]
    decoder: Callable[..., Any]
    validator: Callable[..., Any]
    arbitrary: Callable[..., Any] | None = None
    options: Mapping[str, Any] = dataclass_field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not self.name:
            raise TypeDefinitionError("A custom type needs a name")
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


def string(
    min_length: int | None = None,
    max_length: int | None = None,
    regex: str | re.Pattern[str] | None = None,
    **options: Any,
) -> StringType:
    return StringType(min_length=min_length, max_length=max_length, regex=regex, **options)


def number(
    minimum: float | None = None,
    maximum: float | None = None,
    exclusive_minimum: float | None = None,
    exclusive_maximum: float | None = None,
    multiple_of: float | None = None,
    **options: Any,
) -> NumberType:
    return NumberType(
        minimum=minimum,
        maximum=maximum,
        exclusive_minimum=exclusive_minimum,
        exclusive_maximum=exclusive_maximum,
        multiple_of=multiple_of,
        **options,
    )


def integer(**kwargs: Any) -> NumberType:
    """A number that must be integral, e.g. `integer(minimum=0)` for an age."""
    return number(is_integer=True, **kwargs)


def boolean(**options: Any) -> BooleanType:
    return BooleanType(**options)


def literal(value: Any, accept_missing: bool = False, **options: Any) -> LiteralType:
    return LiteralType(value, accept_missing=accept_missing, **options)


def enumeration(variants: list[str] | tuple[str, ...], **options: Any) -> EnumType:
    return EnumType(tuple(variants), **options)


def optional(type_: TypeLike, **options: Any) -> OptionalType:
    return OptionalType(type_, **options)


def nullable(type_: TypeLike, **options: Any) -> NullableType:
    return NullableType(type_, **options)


def array(
    type_: TypeLike,
    min_items: int | None = None,
    max_items: int | None = None,
    **options: Any,
) -> ArrayType:
    return ArrayType(type_, min_items=min_items, max_items=max_items, **options)


def tuple_(elements: list[TypeLike] | tuple[TypeLike, ...], **options: Any) -> TupleType:
    """
    A fixed-length array; decoded values are Python tuples.

    Usage:
        point = tuple_([number(), number()])
        decode(point, [1, 2])  # Ok((1, 2))
    """
    return TupleType(tuple(elements), **options)


def record(type_: TypeLike, **options: Any) -> RecordType:
    return RecordType(type_, **options)


def field(
    type_: TypeLike,
    description: str | None = None,
    sensitive: bool = False,
    redact: bool = True,
) -> Field:
    return Field(type_, description=description, sensitive=sensitive, redact=redact)


def obj(fields: Mapping[str, TypeLike | Field], **options: Any) -> ObjectType:
    """
    An immutable object with the given fields, in definition order.

    Usage:
        obj({"name": string(), "tags": array(string())}, name="user")
    """
    return ObjectType(fields, mutability=Mutability.IMMUTABLE, **options)


def mutable_obj(fields: Mapping[str, TypeLike | Field], **options: Any) -> ObjectType:
    return ObjectType(fields, mutability=Mutability.MUTABLE, **options)


def union(variants: Mapping[str, TypeLike], **options: Any) -> UnionType:
    return UnionType(variants, **options)


def is_optional(type_: TypeLike) -> bool:
    """
    True for optional types.

    An object field of an optional type may be absent, and is left out of
    decoded and encoded objects when it holds no value.
    """
    return isinstance(concretise(type_), OptionalType)


def children(type_: TypeLike) -> tuple[Type, ...]:
    """Direct child types, in definition order."""
    concrete = concretise(type_)
    match concrete:
        case OptionalType(wrapped=wrapped) | NullableType(wrapped=wrapped) | ArrayType(
            wrapped=wrapped
        ) | RecordType(wrapped=wrapped):
            return (concretise(wrapped),)
        case TupleType(elements=elements):
            return tuple(concretise(e) for e in elements)
        case ObjectType(fields=fields):
            return tuple(concretise(f.type) for f in fields.values())
        case UnionType(variants=variants):
            return tuple(concretise(v) for v in variants.values())
    return ()


def walk(type_: TypeLike) -> Iterator[Type]:
    """
    Depth-first iteration over a type graph.

    Each node is yielded once, so recursive (lazy) definitions terminate.
    """
    seen: set[int] = set()
    stack = [concretise(type_)]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        stack.extend(reversed(children(current)))
