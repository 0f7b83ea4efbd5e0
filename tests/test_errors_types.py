import pytest

from validation.errors import (
    Err,
    FieldMismatch,
    InvalidState,
    Ok,
    ValidationError,
    ensure,
    require,
    sequence_results,
)


class TestValidationError:
    def test_base_class_is_closed(self):
        with pytest.raises(TypeError):
            ValidationError("anything")

    def test_str_is_message(self):
        assert str(FieldMismatch("not_null")) == "not_null"
        assert str(InvalidState("order is closed")) == "order is closed"

    def test_variants_are_values(self):
        assert FieldMismatch("not_null") == FieldMismatch("not_null")
        assert FieldMismatch("x") != InvalidState("x")
        assert hash(FieldMismatch("x")) == hash(FieldMismatch("x"))

    def test_variants_are_frozen(self):
        error = FieldMismatch("not_null")
        with pytest.raises(AttributeError):
            error.message = "other"

    def test_kind(self):
        assert FieldMismatch.kind == "field_mismatch"
        assert InvalidState.kind == "invalid_state"

    def test_pattern_matching(self):
        def describe(error: ValidationError) -> str:
            match error:
                case FieldMismatch(message):
                    return f"field:{message}"
                case InvalidState(message):
                    return f"state:{message}"
            return "unknown"

        assert describe(FieldMismatch("a")) == "field:a"
        assert describe(InvalidState("b")) == "state:b"


class TestResult:
    def test_ok(self):
        result = Ok(3)
        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == 3
        assert result.unwrap_or(0) == 3
        assert result.map(lambda v: v + 1) == Ok(4)
        assert result.map_err(lambda e: InvalidState(str(e))) == result
        assert list(result) == [3]

    def test_err(self):
        error = FieldMismatch("not_null")
        result = Err(error)
        assert result.is_err() and not result.is_ok()
        assert result.unwrap_err() is error
        assert result.unwrap_or(0) == 0
        assert result.map(lambda v: v + 1) == result
        assert result.map_err(lambda e: InvalidState(e.message)) == Err(InvalidState("not_null"))
        assert list(result) == []
        with pytest.raises(ValueError):
            result.unwrap()
        with pytest.raises(ValueError, match="payload invalid"):
            result.expect("payload invalid")

    def test_unwrap_err_on_ok_raises(self):
        with pytest.raises(ValueError):
            Ok(None).unwrap_err()

    def test_and_then_short_circuits(self):
        calls = []

        def step(value):
            calls.append(value)
            return Ok(value * 2)

        assert Ok(2).and_then(step) == Ok(4)
        assert Err(FieldMismatch("x")).and_then(step) == Err(FieldMismatch("x"))
        assert calls == [2]

    def test_match(self):
        assert Ok(1).match(ok=lambda v: "ok", err=lambda e: "err") == "ok"
        assert Err(FieldMismatch("x")).match(ok=lambda v: "ok", err=lambda e: e.message) == "x"


class TestCombinators:
    def test_sequence_results_collects_values(self):
        assert sequence_results([Ok(1), Ok(2)]) == Ok([1, 2])

    def test_sequence_results_returns_first_error(self):
        first, second = FieldMismatch("a"), InvalidState("b")
        assert sequence_results([Ok(1), Err(first), Err(second)]) == Err(first)

    def test_ensure(self):
        assert ensure(True, FieldMismatch("x")) == Ok(None)
        assert ensure(False, FieldMismatch("x")) == Err(FieldMismatch("x"))

    def test_require(self):
        assert require(0, FieldMismatch("x")) == Ok(0)
        assert require(None, FieldMismatch("x")) == Err(FieldMismatch("x"))
