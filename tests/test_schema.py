from typing import Annotated, Optional

import pytest
from pydantic import Field

from validation import (
    DEFAULT_REGISTRY,
    DeriveError,
    Err,
    FieldMismatch,
    InvalidState,
    Ok,
    RuleDescriptor,
    ValidatedSchema,
    ValidationMixin,
    validate,
)
from validation.derive import compiled_validation
from validation.errors import invalid_state

NON_EMPTY = RuleDescriptor(name="non_empty", code="non_empty", check=bool)


class Order(ValidationMixin, ValidatedSchema):
    customer: Annotated[Optional[str], validate("not_null")] = None
    line_items: Annotated[Optional[list[str]], Field(alias="lineItems"), validate("not_null")] = None

    def validate_state(self):
        if self.line_items is not None and not self.line_items:
            return invalid_state("an order needs at least one item")
        return Ok(None)


def test_subclass_gets_compiled_routine():
    assert compiled_validation(Order) is not None
    assert Order(customer="c", lineItems=["a"]).validate_fields() == Ok(None)
    assert Order(customer="c").validate_fields() == Err(FieldMismatch("not_null"))


def test_parses_by_alias_and_checks_by_ident():
    order = Order.model_validate({"customer": "c", "lineItems": ["a"]})
    assert order.line_items == ["a"]
    assert order.validate_fields() == Ok(None)
    assert compiled_validation(Order).fields[1].name == "lineItems"


def test_composite_validation():
    assert Order(customer="c", lineItems=["a"]).validate() == Ok(None)
    assert Order(customer="c", lineItems=[]).validate() == Err(InvalidState("an order needs at least one item"))


def test_field_errors_short_circuit_state_validation():
    assert Order(lineItems=[]).validate() == Err(FieldMismatch("not_null"))


def test_bad_annotation_fails_class_definition():
    with pytest.raises(DeriveError, match="Unexpected validation `non_empty`"):
        class Broken(ValidatedSchema):
            name: Annotated[str, validate("non_empty")] = ""


def test_registry_class_keyword_is_inherited():
    class Tagged(ValidatedSchema, registry=DEFAULT_REGISTRY.with_rules(NON_EMPTY)):
        tag: Annotated[str, validate("non_empty")] = ""

    class Child(Tagged):
        label: Annotated[Optional[str], validate("not_null")] = None

    assert Tagged().validate_fields() == Err(FieldMismatch("non_empty"))
    assert Child(tag="t").validate_fields() == Err(FieldMismatch("not_null"))
    assert Child(tag="t", label="l").validate_fields() == Ok(None)


def test_base_schema_validates_trivially():
    assert ValidatedSchema().validate_fields() == Ok(None)
