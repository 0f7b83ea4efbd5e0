"""Monadic Error Handling Types

Implements a Result/Either type for deterministic, composable propagation of
runtime validation failures, plus the closed ValidationError vocabulary those
failures are expressed in.

ValidationError has exactly two variants:
- FieldMismatch: a structural problem with a field (e.g. a required field is absent)
- InvalidState: a business-state problem across fields, reported by hand-written
  state validation
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Callable, ClassVar, Generic, Iterator, NoReturn,
    TypeVar, Union, final,
)

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound="ValidationError")
F = TypeVar("F", bound="ValidationError")


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Describes a validation failure in the system.

    The type is meant to provide a common language amongst interconnected
    systems/microservices. It is closed: construct one of the two variants,
    never the base class.
    """
    message: str

    kind: ClassVar[str] = ""

    def __post_init__(self) -> None:
        if type(self) is ValidationError:
            raise TypeError("ValidationError is closed; use FieldMismatch or InvalidState")

    def __str__(self) -> str:
        return self.message


@final
@dataclass(frozen=True, slots=True)
class FieldMismatch(ValidationError):
    """An invalid value was passed to the system."""
    kind: ClassVar[str] = "field_mismatch"


@final
@dataclass(frozen=True, slots=True)
class InvalidState(ValidationError):
    """An invalid state was passed to the system."""
    kind: ClassVar[str] = "invalid_state"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result monad.

    Wraps a successful value. Immutable and hashable when T is hashable.
    """
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Extract the value. Safe because Ok always contains a value."""
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"Called unwrap_err on Ok: {self.value!r}")

    def unwrap_or(self, default: T) -> T:
        return self.value

    def expect(self, msg: str) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U, ValidationError]:
        """Transform the success value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[ValidationError], F]) -> Result[T, F]:
        """No-op for Ok variant."""
        return self  # type: ignore

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain operations that may fail."""
        return f(self.value)

    def match(
        self,
        ok: Callable[[T], U],
        err: Callable[[ValidationError], U],
    ) -> U:
        """Pattern match on Result. Forces exhaustive handling."""
        return ok(self.value)

    def __iter__(self) -> Iterator[T]:
        yield self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result monad.

    Wraps a ValidationError.
    """
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises because Err has no value to unwrap."""
        raise ValueError(f"Called unwrap on Err: {self.error!r}")

    def unwrap_err(self) -> E:
        """Extract the error."""
        return self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def expect(self, msg: str) -> NoReturn:
        raise ValueError(f"{msg}: {self.error}")

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """No-op for Err variant."""
        return self  # type: ignore

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Transform the error."""
        return Err(f(self.error))

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """No-op for Err variant."""
        return self  # type: ignore

    def match(
        self,
        ok: Callable[[T], U],
        err: Callable[[E], U],
    ) -> U:
        """Pattern match on Result. Forces exhaustive handling."""
        return err(self.error)

    def __iter__(self) -> Iterator:
        return iter([])


# Type alias for Result monad
Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:
    """Construct Ok variant."""
    return Ok(value)


def err(error: E) -> Err[E]:
    """Construct Err variant."""
    return Err(error)


def sequence_results(results: list[Result[T, E]]) -> Result[list[T], E]:
    """Sequence Results, failing fast on first error.

    Returns Ok with all values if all are Ok.
    Returns first Err encountered.
    """
    values: list[T] = []

    for r in results:
        match r:
            case Ok(v):
                values.append(v)
            case Err(e):
                return Err(e)

    return Ok(values)


def ensure(condition: bool, error: E) -> Result[None, E]:
    """Guard function that returns Err if condition is False."""
    return Ok(None) if condition else Err(error)


def require(value: T | None, error: E) -> Result[T, E]:
    """Convert nullable to Result, returning Err if None."""
    return Ok(value) if value is not None else Err(error)
