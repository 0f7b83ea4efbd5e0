"""Validated Schema Base

Pydantic base class for DTOs that carry declarative field validation. Every
subclass gets its ``validate_fields`` routine compiled once the model is fully
built, so a malformed annotation fails the class definition. A model that
references a type defined later is compiled when pydantic rebuilds it, either
through ``model_rebuild()`` or on first instantiation.

Usage:
    class CreateOrder(ValidationMixin, ValidatedSchema):
        customer: Annotated[Optional[str], validate("not_null")] = None
        items: Annotated[Optional[list[Item]], Field(alias="lineItems"), validate("not_null")] = None

        def validate_state(self) -> Result[None, ValidationError]:
            if self.items is not None and not self.items:
                return invalid_state("an order needs at least one item")
            return Ok(None)

A custom registry is passed as a class keyword and inherited by subclasses:

    class Tagged(ValidatedSchema, registry=DEFAULT_REGISTRY.with_rules(TAG_RULE)):
        ...
"""
from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from validation.derive.compiler import compile_field_validation, defer, install
from validation.derive.registry import DEFAULT_REGISTRY, RuleRegistry
from validation.errors.types import FieldMismatch, Result


class ValidatedSchema(BaseModel):
    """Base schema whose subclasses get a compiled ``validate_fields``."""

    model_config = ConfigDict(populate_by_name=True)

    __validation_registry__: ClassVar[RuleRegistry] = DEFAULT_REGISTRY

    def __init_subclass__(cls, registry: RuleRegistry | None = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if registry is not None:
            cls.__validation_registry__ = registry

    @classmethod
    def __pydantic_init_subclass__(cls, registry: RuleRegistry | None = None, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if cls.__pydantic_complete__:
            install(cls, compile_field_validation(cls, cls.__validation_registry__))
        else:
            defer(cls, cls.__validation_registry__, "model is not fully defined")

    @classmethod
    def model_rebuild(
        cls,
        *,
        force: bool = False,
        raise_errors: bool = True,
        _parent_namespace_depth: int = 2,
        _types_namespace: Any = None,
    ) -> bool | None:
        rebuilt = super().model_rebuild(
            force=force,
            raise_errors=raise_errors,
            _parent_namespace_depth=_parent_namespace_depth + 1,
            _types_namespace=_types_namespace,
        )
        if cls.__pydantic_complete__:
            install(cls, compile_field_validation(cls, cls.__validation_registry__))
        return rebuilt

    def validate_fields(self) -> Result[None, FieldMismatch]:
        """Replaced on every subclass by the compiled routine."""
        cls = type(self)
        compiled = compile_field_validation(cls, self.__validation_registry__)
        if cls is not ValidatedSchema:
            install(cls, compiled)
        return compiled(self)
