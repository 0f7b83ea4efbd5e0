"""Declarative DTO validation.

Fields declare their rules with ``Annotated`` metadata; a routine checking
them is compiled once per DTO class. Failures are reported as a closed
ValidationError vocabulary that maps onto status codes at service boundaries.

Usage:
    from dataclasses import dataclass
    from typing import Annotated, Optional

    from validation import FieldMismatch, Err, field_validate, validate

    @field_validate
    @dataclass
    class Required:
        val: Annotated[Optional[int], validate("not_null")]

    assert Required(None).validate_fields() == Err(FieldMismatch("not_null"))
"""
__version__ = "0.1.0"

from .contracts import (
    FieldValidation,
    Ref,
    StateValidation,
    Validation,
    ValidationMixin,
    ValidationResult,
)
from .derive import (
    DEFAULT_REGISTRY,
    DeriveError,
    RuleDescriptor,
    RuleRegistry,
    ValidationType,
    compile_field_validation,
    field_validate,
    validate,
)
from .errors import (
    Err,
    FieldMismatch,
    InvalidState,
    Ok,
    Result,
    ValidationError,
    ValidationErrorResponse,
)
from .schema import ValidatedSchema

__all__ = [
    # Contracts
    "FieldValidation",
    "StateValidation",
    "Validation",
    "ValidationMixin",
    "ValidationResult",
    "Ref",
    # Derive
    "validate",
    "field_validate",
    "compile_field_validation",
    "ValidationType",
    "RuleDescriptor",
    "RuleRegistry",
    "DEFAULT_REGISTRY",
    "DeriveError",
    "ValidatedSchema",
    # Errors
    "Result",
    "Ok",
    "Err",
    "ValidationError",
    "FieldMismatch",
    "InvalidState",
    "ValidationErrorResponse",
]
