"""
Exceptions raised by tessera.

Bad input is never raised: decode and validate report it through the
Result model. These exceptions signal programming errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .result import ErrorEntry


class TesseraError(Exception):
    """Base class for every exception raised by tessera."""


class TypeDefinitionError(TesseraError, ValueError):
    """A type was built with inconsistent options."""


class InternalError(TesseraError):
    """
    An engine or extension bug.

    Raised when a custom type's closure throws or returns something that is
    not a Result, or when a type of unknown kind reaches a dispatcher.
    """

    def __init__(self, message: str, type_name: str | None = None):
        super().__init__(message)
        self.type_name = type_name


class ResultError(TesseraError):
    """Raised by `Err.unwrap()`; carries the errors of the failed result."""

    def __init__(self, errors: Sequence[ErrorEntry]):
        self.errors = tuple(errors)
        lines = "; ".join(str(error) for error in self.errors)
        super().__init__(f"{len(self.errors)} error(s): {lines}")
