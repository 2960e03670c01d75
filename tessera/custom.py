"""
Custom types: the extension point for scalar kinds.

A custom type owns three closures and an optional example generator:

    decoder(value, decode_options, options) -> Result
    validator(value, validation_options, options) -> Result[True]
    encoder(value, encode_options, options) -> JSON-compatible value
    arbitrary(max_depth, options) -> hypothesis strategy

`options` is the read-only mapping given at construction. The decoder always
runs before the validator in `decode()`; the encoder only ever sees values of
the type's domain. Closures are expected to be total; anything they raise is
re-raised as an InternalError.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .errors import InternalError
from .model import CustomType
from .result import Err, Ok

logger = logging.getLogger(__name__)


def custom(
    name: str,
    encoder: Callable[..., Any],
    decoder: Callable[..., Any],
    validator: Callable[..., Any],
    arbitrary: Callable[..., Any] | None = None,
    options: Mapping[str, Any] | None = None,
    **base_options: Any,
) -> CustomType:
    """
    Build a custom type.

    Args:
        name: Display name; two custom types may share it
        encoder: Domain value -> wire value
        decoder: Untrusted input -> Result with a domain value
        validator: Domain value -> Result[True]
        arbitrary: Optional generator of example domain values
        options: Extra configuration handed to every closure
        **base_options: description, sensitive, message

    Usage:
        even = custom(
            "even",
            lambda value, _opts, _o: value,
            lambda value, _opts, _o: succeed(value) if isinstance(value, int) else fail("expected an integer", value),
            lambda value, _opts, _o: succeed(True) if value % 2 == 0 else fail("must be even", value),
        )
    """
    return CustomType(
        encoder,
        decoder,
        validator,
        arbitrary,
        options if options is not None else {},
        name=name,
        **base_options,
    )


def run_closure(type_: CustomType, role: str, fn: Callable[..., Any], *args: Any) -> Any:
    """
    Call one of a custom type's closures.

    Exceptions escaping the closure become InternalError; for the decoder and
    the validator, a return value that is not a Result does too.
    """
    try:
        outcome = fn(*args)
    except Exception as e:
        logger.error("%s of custom type %r raised %s", role, type_.name, type(e).__name__)
        raise InternalError(
            f"The {role} of custom type {type_.name!r} raised: {e}", type_.name
        ) from e
    if role != "encoder" and not isinstance(outcome, (Ok, Err)):
        raise InternalError(
            f"The {role} of custom type {type_.name!r} returned "
            f"{type(outcome).__name__} instead of a Result",
            type_.name,
        )
    return outcome
