"""Validation Error Vocabulary

Runtime validation failures and their wire representation.

Key components:
- Result[T, E]: Monadic container for success/failure
- ValidationError: closed taxonomy (FieldMismatch | InvalidState)
- ValidationErrorResponse: status code + message for service boundaries

Usage:
    from validation.errors import Err, FieldMismatch, Ok, ValidationErrorResponse

    match payload.validate_fields():
        case Ok(_):
            process(payload)
        case Err(error):
            return ValidationErrorResponse.from_error(error)
"""
from .types import (
    Result,
    Ok,
    Err,
    ValidationError,
    FieldMismatch,
    InvalidState,
    ok,
    err,
    sequence_results,
    ensure,
    require,
)

from .response import (
    BAD_REQUEST,
    UNPROCESSABLE_ENTITY,
    INTERNAL_SERVER_ERROR,
    ValidationErrorResponse,
)

from .builders import (
    field_mismatch,
    required_field,
    invalid_state,
    state_conflict,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "ValidationError",
    "FieldMismatch",
    "InvalidState",
    # Constructors
    "ok",
    "err",
    # Combinators
    "sequence_results",
    "ensure",
    "require",
    # Responses
    "BAD_REQUEST",
    "UNPROCESSABLE_ENTITY",
    "INTERNAL_SERVER_ERROR",
    "ValidationErrorResponse",
    # Builders
    "field_mismatch",
    "required_field",
    "invalid_state",
    "state_conflict",
]
