import logging

from .arbitrary import arbitrary
from .custom import custom
from .decoder import decode, decode_without_validation
from .encoder import encode, encode_checked
from .errors import InternalError, ResultError, TesseraError, TypeDefinitionError
from .model import (
    MISSING,
    Field,
    Kind,
    Mutability,
    Type,
    array,
    boolean,
    children,
    concretise,
    enumeration,
    field,
    integer,
    is_optional,
    literal,
    mutable_obj,
    nullable,
    number,
    obj,
    optional,
    record,
    string,
    tuple_,
    union,
    walk,
)
from .options import (
    DecodeOptions,
    EncodeOptions,
    ErrorReportingStrategy,
    FieldStrictness,
    SensitiveInformationStrategy,
    TypeCastingStrategy,
    ValidationOptions,
)
from .path import format_path, parse_path
from .patterns import from_pattern
from .result import (
    Err,
    ErrorEntry,
    Ok,
    Result,
    fail,
    fail_with_errors,
    gather_fields,
    gather_items,
    merge,
    succeed,
)
from .schema import to_pydantic
from .validator import validate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Operations
    "decode",
    "decode_without_validation",
    "validate",
    "encode",
    "encode_checked",
    "arbitrary",
    "to_pydantic",
    # Types
    "Type",
    "Field",
    "Kind",
    "Mutability",
    "MISSING",
    "string",
    "number",
    "integer",
    "boolean",
    "literal",
    "enumeration",
    "optional",
    "nullable",
    "array",
    "tuple_",
    "record",
    "field",
    "obj",
    "mutable_obj",
    "union",
    "custom",
    "from_pattern",
    "concretise",
    "is_optional",
    "children",
    "walk",
    # Results
    "Ok",
    "Err",
    "Result",
    "ErrorEntry",
    "succeed",
    "fail",
    "fail_with_errors",
    "merge",
    "gather_fields",
    "gather_items",
    "format_path",
    "parse_path",
    # Options
    "DecodeOptions",
    "ValidationOptions",
    "EncodeOptions",
    "TypeCastingStrategy",
    "ErrorReportingStrategy",
    "FieldStrictness",
    "SensitiveInformationStrategy",
    # Errors
    "TesseraError",
    "TypeDefinitionError",
    "InternalError",
    "ResultError",
]
