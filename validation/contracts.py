"""Validation Contracts

The capabilities a validated DTO exposes. Any system validates a payload
through these entry points before operating on it, so a payload that passed
is safe for consumption by lower systems.

- FieldValidation.validate_fields(): per-field rules, generated by
  ``field_validate`` / ``ValidatedSchema``
- StateValidation.validate_state(): whole-payload rules, always written by the
  DTO's owner since only the owner knows what a valid state is
- Validation.validate(): both of the above

Each capability holds through a read-only reference: ``Ref(dto)`` answers
every entry point exactly as ``dto`` does.
"""
from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from validation.errors.types import Result, ValidationError

T = TypeVar("T")

ValidationResult = Result[None, ValidationError]


@runtime_checkable
class FieldValidation(Protocol):
    """Validates the fields a struct declares rules for."""

    def validate_fields(self) -> ValidationResult:
        ...


@runtime_checkable
class StateValidation(Protocol):
    """Validates the state of an entire payload."""

    def validate_state(self) -> ValidationResult:
        ...


@runtime_checkable
class Validation(FieldValidation, StateValidation, Protocol):
    """Both capabilities plus a composite entry point."""

    def validate(self) -> ValidationResult:
        ...


class ValidationMixin:
    """Composite ``validate`` for classes with both capabilities.

    Field validation runs first; state validation only runs on a payload
    whose fields passed.
    """

    def validate(self) -> ValidationResult:
        return self.validate_fields().and_then(lambda _: self.validate_state())


class Ref(Generic[T]):
    """Read-only reference to a validated object.

    Validation entry points delegate to the target, as does attribute access;
    attribute writes and deletes raise AttributeError.

    A reference always exposes all three entry points, so it satisfies the
    ``Validation`` protocol whatever its target supports. Capabilities are
    checked on call: an entry point the target lacks raises AttributeError.
    Check ``isinstance(ref.target, ...)`` to learn what the target provides.
    """

    __slots__ = ("_target",)

    def __init__(self, target: T):
        object.__setattr__(self, "_target", target)

    @property
    def target(self) -> T:
        return self._target

    def validate_fields(self) -> ValidationResult:
        return self._target.validate_fields()

    def validate_state(self) -> ValidationResult:
        return self._target.validate_state()

    def validate(self) -> ValidationResult:
        return self._target.validate()

    def __getattr__(self, name: str) -> Any:
        if name == "_target":
            raise AttributeError(name)
        return getattr(self._target, name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"cannot set {name!r} through a read-only reference")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"cannot delete {name!r} through a read-only reference")

    def __repr__(self) -> str:
        return f"Ref({self._target!r})"
