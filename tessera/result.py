"""
Result type for tessera operations.

Provides a minimal Result type (Ok/Err), the ErrorEntry record and the
combinators used by the decode/validate dispatchers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from .errors import ResultError
from .path import Path, format_path

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")

Segment = str | int


@dataclass(frozen=True, slots=True)
class ErrorEntry:
    """
    One reported problem.

    `value` is the offending raw or decoded value, `path` locates it
    relative to the value handed to the operation.
    """

    message: str
    value: Any
    path: Path = ()

    def prepend(self, segment: Segment) -> ErrorEntry:
        return ErrorEntry(self.message, self.value, (segment, *self.path))

    @property
    def location(self) -> str:
        return format_path(self.path)

    def __str__(self) -> str:
        where = self.location
        return f"{where}: {self.message}" if where else self.message


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))

    def chain(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        return fn(self.value)

    def replace(self, value: U) -> Ok[U]:
        return Ok(value)

    def map_errors(self, fn: Callable[[ErrorEntry], ErrorEntry]) -> Ok[T]:
        return self

    def prepend_path(self, segment: Segment) -> Ok[T]:
        return self

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """Failure result containing one or more error entries."""

    errors: tuple[ErrorEntry, ...]

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("A failing result needs at least one error")

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> Err:
        return self

    def chain(self, fn: Callable[[Any], Result[Any]]) -> Err:
        return self

    def replace(self, value: Any) -> Err:
        return self

    def map_errors(self, fn: Callable[[ErrorEntry], ErrorEntry]) -> Err:
        return Err(tuple(fn(error) for error in self.errors))

    def prepend_path(self, segment: Segment) -> Err:
        return Err(tuple(error.prepend(segment) for error in self.errors))

    def unwrap(self) -> Any:
        raise ResultError(self.errors)


Result = Ok[T] | Err


def succeed(value: T) -> Ok[T]:
    """Wrap a value in a successful result."""
    return Ok(value)


def fail(message: str, value: Any, path: Path = ()) -> Err:
    """
    Build a failure with a single error.

    Usage:
        fail("expected a string", 10)
        fail("must be positive", -1, ("age",))
    """
    return Err((ErrorEntry(message, value, tuple(path)),))


def fail_with_errors(errors: Iterable[ErrorEntry]) -> Err:
    return Err(tuple(errors))


def merge(
    left: Result[T], right: Result[U], combine: Callable[[T, U], V]
) -> Result[V]:
    """
    Join two results of different value types.

    Both successes are combined with `combine`; otherwise every error from
    both sides is kept, left first.
    """
    if isinstance(left, Ok) and isinstance(right, Ok):
        return Ok(combine(left.value, right.value))
    errors: list[ErrorEntry] = []
    for result in (left, right):
        if isinstance(result, Err):
            errors.extend(result.errors)
    return Err(tuple(errors))


def gather_fields(results: Mapping[str, Result[Any]]) -> Result[dict[str, Any]]:
    """
    Build an object-shaped result from per-field results.

    Error paths are prefixed with their field name; field order is kept.
    """
    values: dict[str, Any] = {}
    errors: list[ErrorEntry] = []
    for name, result in results.items():
        if isinstance(result, Ok):
            values[name] = result.value
        else:
            errors.extend(result.prepend_path(name).errors)
    return Err(tuple(errors)) if errors else Ok(values)


def gather_items(results: Iterable[Result[Any]]) -> Result[list[Any]]:
    """Build an array-shaped result, prefixing error paths with the index."""
    values: list[Any] = []
    errors: list[ErrorEntry] = []
    for index, result in enumerate(results):
        if isinstance(result, Ok):
            values.append(result.value)
        else:
            errors.extend(result.prepend_path(index).errors)
    return Err(tuple(errors)) if errors else Ok(values)


def override_message(result: Result[T], message: str | None) -> Result[T]:
    """Replace the message of the errors raised at this level (empty path)."""
    if message is None or isinstance(result, Ok):
        return result
    return result.map_errors(
        lambda error: ErrorEntry(message, error.value, error.path) if not error.path else error
    )
