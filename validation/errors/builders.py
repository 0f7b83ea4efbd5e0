"""Validation Error Builders

Ergonomic constructors returning Err-wrapped validation errors. Intended for
hand-written state validation, where the owner of a DTO decides what makes a
state valid.
"""
from .types import Err, FieldMismatch, InvalidState


def field_mismatch(message: str) -> Err[FieldMismatch]:
    """Create a field-level validation failure."""
    return Err(FieldMismatch(message))


def required_field(field: str) -> Err[FieldMismatch]:
    return field_mismatch(f"Required field '{field}' is missing")


def invalid_state(message: str) -> Err[InvalidState]:
    """Create a business-state validation failure."""
    return Err(InvalidState(message))


def state_conflict(*fields: str, reason: str = "") -> Err[InvalidState]:
    msg = f"Conflicting values for {', '.join(repr(f) for f in fields)}"
    if reason:
        msg += f": {reason}"
    return invalid_state(msg)
