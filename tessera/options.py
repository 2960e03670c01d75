"""
Options for the decode, validate and encode operations.

Options are immutable pydantic models passed explicitly through every
recursive call. They accept snake_case or camelCase names and plain strings
for the enum values:

    DecodeOptions(type_casting_strategy="tryCasting")
    EncodeOptions.model_validate({"sensitiveInformationStrategy": "hide"})
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TypeCastingStrategy(str, Enum):
    EXPECT_EXACT_TYPES = "expectExactTypes"
    TRY_CASTING = "tryCasting"


class ErrorReportingStrategy(str, Enum):
    ALL_ERRORS = "allErrors"
    STOP_AT_FIRST_ERROR = "stopAtFirstError"


class FieldStrictness(str, Enum):
    EXPECT_EXACT_FIELDS = "expectExactFields"
    ALLOW_ADDITIONAL_FIELDS = "allowAdditionalFields"


class SensitiveInformationStrategy(str, Enum):
    KEEP = "keep"
    HIDE = "hide"


class _Options(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DecodeOptions(_Options):
    """How untrusted input is turned into domain values."""

    type_casting_strategy: TypeCastingStrategy = TypeCastingStrategy.EXPECT_EXACT_TYPES
    error_reporting_strategy: ErrorReportingStrategy = ErrorReportingStrategy.ALL_ERRORS
    field_strictness: FieldStrictness = FieldStrictness.EXPECT_EXACT_FIELDS

    @property
    def try_casting(self) -> bool:
        return self.type_casting_strategy is TypeCastingStrategy.TRY_CASTING

    @property
    def stop_at_first_error(self) -> bool:
        return self.error_reporting_strategy is ErrorReportingStrategy.STOP_AT_FIRST_ERROR


class ValidationOptions(_Options):
    error_reporting_strategy: ErrorReportingStrategy = ErrorReportingStrategy.ALL_ERRORS

    @property
    def stop_at_first_error(self) -> bool:
        return self.error_reporting_strategy is ErrorReportingStrategy.STOP_AT_FIRST_ERROR


class EncodeOptions(_Options):
    sensitive_information_strategy: SensitiveInformationStrategy = (
        SensitiveInformationStrategy.KEEP
    )

    @property
    def hide_sensitive(self) -> bool:
        return self.sensitive_information_strategy is SensitiveInformationStrategy.HIDE


DEFAULT_DECODE_OPTIONS = DecodeOptions()
DEFAULT_VALIDATION_OPTIONS = ValidationOptions()
DEFAULT_ENCODE_OPTIONS = EncodeOptions()

O = TypeVar("O", bound=_Options)


def resolve(cls: type[O], options: O | Mapping[str, Any] | None, default: O) -> O:
    """
    Normalize what callers pass as options.

    None gives the default, a mapping is validated into `cls`, an instance
    is returned as is.
    """
    if options is None:
        return default
    if isinstance(options, cls):
        return options
    if isinstance(options, Mapping):
        return cls.model_validate(options)
    raise TypeError(f"Expected {cls.__name__} or a mapping, got {type(options).__name__}")
