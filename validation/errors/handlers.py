"""FastAPI Exception Handlers

Integrates runtime validation errors with FastAPI's exception handling.
Conversion to a response object happens here, at the service boundary, and
nowhere else: the status code is always read from ValidationErrorResponse.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from validation.logging import errors_logger

from .response import ValidationErrorResponse
from .types import Result, ValidationError

log = errors_logger()


class ValidationErrorException(Exception):
    """Exception wrapper for ValidationError.

    Use this when you need to raise a ValidationError in code that
    doesn't use the Result monad (e.g., FastAPI dependencies).
    """

    def __init__(self, error: ValidationError):
        self.error = error
        super().__init__(str(error))


def result_to_response(response: ValidationErrorResponse) -> JSONResponse:
    """Convert ValidationErrorResponse to FastAPI JSONResponse."""
    log_method = log.warning if response.error_code < 500 else log.error
    log_method(
        "validation_error_response",
        error_code=response.error_code,
        error_message=response.error_message,
    )

    return JSONResponse(
        status_code=response.error_code,
        content=response.to_dict(),
    )


async def validation_error_handler(
    request: Request, exc: ValidationErrorException
) -> JSONResponse:
    """Handle ValidationErrorException raised in route handlers."""
    return result_to_response(ValidationErrorResponse.from_error(exc.error))


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all handler for unhandled exceptions.

    No specific ValidationError is available, so the default response is used.
    """
    log.exception(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
    )
    return result_to_response(ValidationErrorResponse.default())


def register_error_handlers(app: FastAPI) -> None:
    """Register validation error handlers on a FastAPI app.

    Usage:
        app = FastAPI(...)
        register_error_handlers(app)
    """
    app.add_exception_handler(ValidationErrorException, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def raise_error(error: ValidationError) -> None:
    """Raise ValidationError as exception.

    Use when you need to exit early from code that doesn't
    use the Result monad.
    """
    raise ValidationErrorException(error)


def raise_result(result: Result) -> None:
    """Raise error if Result is Err, otherwise return.

    Usage:
        raise_result(payload.validate_fields())  # Raises if Err
        # Continue with a trusted payload...
    """
    if result.is_err():
        raise ValidationErrorException(result.unwrap_err())
