"""Wire-facing Validation Error Response

The shape a service returns to clients when validation fails. This module is
the only place HTTP status codes are decided for validation failures.

Serialized form:
{
    "errorCode": 400,
    "errorMessage": "not_null"
}
"""
from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .types import FieldMismatch, InvalidState, ValidationError

BAD_REQUEST = 400
UNPROCESSABLE_ENTITY = 422
INTERNAL_SERVER_ERROR = 500

DEFAULT_ERROR_MESSAGE = "Internal Server Error"


class ValidationErrorResponse(BaseModel):
    """Validation failure expressed as a status code and message.

    Constructible three ways:
    - default(): 500 / "Internal Server Error", for faults with no specific ValidationError
    - new(code, message): explicit values
    - from_error(error): FieldMismatch -> 400, InvalidState -> 422
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    error_code: int = INTERNAL_SERVER_ERROR
    error_message: str = DEFAULT_ERROR_MESSAGE

    @classmethod
    def default(cls) -> Self:
        return cls(error_code=INTERNAL_SERVER_ERROR, error_message=DEFAULT_ERROR_MESSAGE)

    @classmethod
    def new(cls, error_code: int, error_message: str) -> Self:
        """Create a response from an explicit status code and message.

        Args:
            error_code: HTTP status code
            error_message: Custom error message
        """
        return cls(error_code=error_code, error_message=error_message)

    @classmethod
    def from_error(cls, error: ValidationError) -> Self:
        """Map a ValidationError onto its response. Total over both variants."""
        match error:
            case FieldMismatch(message):
                return cls.new(BAD_REQUEST, message)
            case InvalidState(message):
                return cls.new(UNPROCESSABLE_ENTITY, message)
        raise TypeError(f"Unsupported validation error: {type(error).__name__}")

    def to_dict(self) -> dict[str, int | str]:
        """Serialize with wire (camelCase) keys."""
        return self.model_dump(by_alias=True)
