"""
Pydantic interop.

Compiles tessera object types into pydantic models by walking the type graph.

Usage:
    User = to_pydantic(obj({"name": string(), "email": optional(scalars.email())}), "User")
    User(name="Alice", email="alice@example.com")
"""

from __future__ import annotations

from typing import Annotated, Any, Literal
from typing import Optional as TypingOptional
from typing import Union

from pydantic import BeforeValidator, create_model

from .decoder import decode
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
    Type,
    TypeLike,
    UnionType,
    concretise,
    is_optional,
)
from .result import Err


def to_pydantic(type_: TypeLike, model_name: str | None = None) -> type:
    """
    Compile an object type to a Pydantic model.

    Args:
        type_: An object type
        model_name: Name of the generated class; defaults to the type's name

    Returns:
        A Pydantic BaseModel subclass. Optional fields default to None,
        nested objects become nested models, custom types are decoded with
        tessera before pydantic sees them.
    """
    concrete = concretise(type_)
    if not isinstance(concrete, ObjectType):
        raise TypeError(f"Only object types can become models, got {concrete.kind.value}")
    return _Compiler().model(concrete, model_name or concrete.name or "Model")


class _Compiler:
    def __init__(self) -> None:
        self.building: set[int] = set()

    def model(self, type_: ObjectType, name: str) -> type:
        if id(type_) in self.building:
            raise TypeDefinitionError(f"Recursive type {name!r} cannot be compiled to a model")
        self.building.add(id(type_))
        try:
            fields: dict[str, Any] = {}
            for key, field in type_.fields.items():
                if is_optional(field.type):
                    inner = self.annotation(concretise(field.type).wrapped, f"{name}_{key}")
                    fields[key] = (TypingOptional[inner], None)
                else:
                    fields[key] = (self.annotation(field.type, f"{name}_{key}"), ...)
            return create_model(name, **fields)
        finally:
            self.building.discard(id(type_))

    def annotation(self, type_: TypeLike, name: str) -> Any:
        """Python annotation for a type; `name` is used for nested models."""
        concrete = concretise(type_)
        match concrete:
            case StringType():
                return str
            case NumberType(is_integer=True):
                return int
            case NumberType():
                return float
            case BooleanType():
                return bool
            case LiteralType(value=value):
                return Literal[value]
            case EnumType(variants=variants):
                return Literal[variants]
            case OptionalType(wrapped=wrapped) | NullableType(wrapped=wrapped):
                return TypingOptional[self.annotation(wrapped, name)]
            case ArrayType(wrapped=wrapped):
                return list[self.annotation(wrapped, name)]  # type: ignore[misc]
            case TupleType(elements=elements):
                items = tuple(
                    self.annotation(element, f"{name}_{index}") for index, element in enumerate(elements)
                )
                return tuple[items]  # type: ignore[valid-type]
            case RecordType(wrapped=wrapped):
                return dict[str, self.annotation(wrapped, name)]  # type: ignore[misc]
            case ObjectType():
                return self.model(concrete, concrete.name or name.title().replace("_", ""))
            case UnionType(variants=variants):
                members = tuple(
                    self.annotation(variant, f"{name}_{key}") for key, variant in variants.items()
                )
                return Union[members] if len(members) > 1 else members[0]
            case CustomType():
                return Annotated[Any, BeforeValidator(_custom_validator(concrete))]
        raise TypeDefinitionError(f"Cannot compile {type(concrete).__name__} to an annotation")


def _custom_validator(type_: Type):
    def run(value: Any) -> Any:
        result = decode(type_, value)
        if isinstance(result, Err):
            raise ValueError("; ".join(str(error) for error in result.errors))
        return result.value

    return run
