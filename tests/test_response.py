import pytest
from pydantic import ValidationError as PydanticValidationError

from validation.errors import (
    BAD_REQUEST,
    INTERNAL_SERVER_ERROR,
    UNPROCESSABLE_ENTITY,
    FieldMismatch,
    InvalidState,
    ValidationErrorResponse,
    field_mismatch,
    invalid_state,
    required_field,
    state_conflict,
)


class TestValidationErrorResponse:
    def test_default(self):
        response = ValidationErrorResponse.default()
        assert response.error_code == 500
        assert response.error_message == "Internal Server Error"

    def test_default_matches_field_defaults(self):
        assert ValidationErrorResponse() == ValidationErrorResponse.default()

    def test_new(self):
        response = ValidationErrorResponse.new(418, "teapot")
        assert (response.error_code, response.error_message) == (418, "teapot")

    def test_field_mismatch_is_bad_request(self):
        response = ValidationErrorResponse.from_error(FieldMismatch("not_null"))
        assert response.error_code == BAD_REQUEST == 400
        assert response.error_message == "not_null"

    def test_invalid_state_is_unprocessable(self):
        response = ValidationErrorResponse.from_error(InvalidState("closed"))
        assert response.error_code == UNPROCESSABLE_ENTITY == 422
        assert response.error_message == "closed"

    def test_internal_server_error_constant(self):
        assert INTERNAL_SERVER_ERROR == 500

    def test_unknown_error_type_rejected(self):
        with pytest.raises(TypeError):
            ValidationErrorResponse.from_error("not_null")

    def test_serializes_camel_case(self):
        response = ValidationErrorResponse.from_error(FieldMismatch("not_null"))
        assert response.to_dict() == {"errorCode": 400, "errorMessage": "not_null"}

    def test_accepts_wire_keys(self):
        response = ValidationErrorResponse.model_validate({"errorCode": 422, "errorMessage": "closed"})
        assert response == ValidationErrorResponse.new(422, "closed")

    def test_frozen(self):
        response = ValidationErrorResponse.default()
        with pytest.raises(PydanticValidationError):
            response.error_code = 400


class TestBuilders:
    def test_field_mismatch(self):
        assert field_mismatch("not_null").unwrap_err() == FieldMismatch("not_null")

    def test_required_field(self):
        assert required_field("email").unwrap_err().message == "Required field 'email' is missing"

    def test_invalid_state(self):
        assert invalid_state("closed").unwrap_err() == InvalidState("closed")

    def test_state_conflict(self):
        error = state_conflict("start", "end", reason="start must precede end").unwrap_err()
        assert isinstance(error, InvalidState)
        assert error.message == "Conflicting values for 'start', 'end': start must precede end"
