"""Validation Compiler

Turns a struct's annotated fields into one ``validate_fields`` routine. The
routine is produced once per (struct, registry) when the class is defined, so
a malformed struct never finishes defining. A struct whose field types name
something not defined yet (itself, a later class) is compiled on the first
``validate_fields()`` call instead.

The emitted routine:
- checks every annotated field, in declaration order, then annotation order
- reads each value through its passing convention and never mutates it
- returns ``Ok(None)`` when every check passes, else ``Err`` of the first
  recorded ``FieldMismatch``

Usage:
    @field_validate
    @dataclass
    class Required:
        val: Annotated[Optional[Item], validate("not_null")]

    Required(None).validate_fields()  # Err(FieldMismatch("not_null"))
"""
from __future__ import annotations

import abc
import copy
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, overload

from validation.config import get_settings
from validation.errors.types import Err, FieldMismatch, Ok, Result
from validation.logging import derive_logger

from .annotations import FieldDescriptor, _struct_name, parse_struct
from .diagnostics import DeriveError, UnresolvedReference
from .quotation import ROUTINE_NAME, FieldQuoter, create_field_validation, create_fn, quote_routine
from .registry import DEFAULT_REGISTRY, RuleDescriptor, RuleRegistry

C = TypeVar("C", bound=type)

ARTIFACT_ATTR = "__field_validation__"


@dataclass(frozen=True, slots=True)
class CompiledCheck:
    """One rule applied to one field."""
    index: int
    field: FieldDescriptor
    rule: RuleDescriptor

    @property
    def binding(self) -> str:
        """Name the rule's check procedure is bound to in the routine namespace."""
        return f"_rule_{self.index}"

    def lines(self) -> list[str]:
        return create_field_validation(FieldQuoter(self.field), self.rule, self.binding)


@dataclass(frozen=True, slots=True)
class CompiledValidation:
    """Per-struct compilation artifact."""
    struct: type
    fields: tuple[FieldDescriptor, ...]
    checks: tuple[CompiledCheck, ...]
    source: str
    routine: Callable[[Any], Result[None, FieldMismatch]]
    registry: RuleRegistry

    def __call__(self, instance: Any) -> Result[None, FieldMismatch]:
        return self.routine(instance)


def compile_field_validation(cls: type, registry: RuleRegistry = DEFAULT_REGISTRY) -> CompiledValidation:
    """Compile the field validation routine for `cls`.

    The artifact installed on `cls` is reused when it was built from the same
    registry.

    Raises:
        DeriveError: the struct, one of its field types, or one of its
            annotations cannot be compiled.
    """
    if not isinstance(cls, type):
        raise DeriveError("`field_validate` can only be used with structs", struct=_struct_name(cls))
    compiled = compiled_validation(cls)
    if compiled is not None and compiled.registry is registry:
        return compiled
    return _compile(cls, registry)


def _compile(cls: type, registry: RuleRegistry) -> CompiledValidation:
    parsed = parse_struct(cls, registry)

    checks: list[CompiledCheck] = []
    for field, rules in parsed:
        for rule in rules:
            checks.append(CompiledCheck(index=len(checks), field=field, rule=rule))

    namespace: dict[str, Any] = {
        "_Ok": Ok,
        "_Err": Err,
        "_FieldMismatch": FieldMismatch,
        "_copy": copy.copy,
        **{check.binding: check.rule.check for check in checks},
    }
    source = quote_routine([check.lines() for check in checks])
    routine = create_fn(source, namespace, filename=f"<field_validate {cls.__module__}.{cls.__qualname__}>")
    routine.__module__ = cls.__module__
    routine.__qualname__ = f"{cls.__qualname__}.{ROUTINE_NAME}"
    routine.__doc__ = f"Validate the annotated fields of {cls.__qualname__}."

    log = derive_logger()
    log.debug(
        "field_validation_compiled",
        struct=cls.__qualname__,
        fields=len(parsed),
        checks=len(checks),
        rules=sorted({check.rule.name for check in checks}),
    )
    if get_settings().DERIVE_DEBUG:
        log.debug("field_validation_source", struct=cls.__qualname__, source=source)

    return CompiledValidation(
        struct=cls,
        fields=tuple(field for field, _ in parsed),
        checks=tuple(checks),
        source=source,
        routine=routine,
        registry=registry,
    )


def install(cls: C, compiled: CompiledValidation) -> C:
    """Attach a compiled routine to its struct as ``validate_fields``."""
    setattr(cls, ROUTINE_NAME, compiled.routine)
    setattr(cls, ARTIFACT_ATTR, compiled)
    # validate_fields may have been declared abstract by a base class
    abc.update_abstractmethods(cls)
    return cls


def defer(cls: C, registry: RuleRegistry, reason: str | None = None) -> C:
    """Install a ``validate_fields`` that compiles `cls` on first use and replaces itself."""
    def validate_fields(self):
        compiled = compile_field_validation(cls, registry)
        install(cls, compiled)
        return compiled(self)

    validate_fields.__module__ = cls.__module__
    validate_fields.__qualname__ = f"{cls.__qualname__}.{ROUTINE_NAME}"
    setattr(cls, ROUTINE_NAME, validate_fields)
    abc.update_abstractmethods(cls)
    derive_logger().debug("field_validation_deferred", struct=cls.__qualname__, reason=reason)
    return cls


@overload
def field_validate(cls: C, /) -> C: ...


@overload
def field_validate(*, registry: RuleRegistry = ...) -> Callable[[C], C]: ...


def field_validate(cls=None, /, *, registry: RuleRegistry = DEFAULT_REGISTRY):
    """Class decorator generating ``validate_fields`` from field annotations.

    Usable bare (``@field_validate``) or with a custom registry
    (``@field_validate(registry=DEFAULT_REGISTRY.with_rules(...))``).
    Apply it above ``@dataclass`` so the fields already exist.
    """
    def wrap(target: C) -> C:
        try:
            compiled = compile_field_validation(target, registry)
        except UnresolvedReference as exc:
            return defer(target, registry, exc.message)
        return install(target, compiled)

    if cls is None:
        return wrap
    return wrap(cls)


def compiled_validation(cls: type) -> CompiledValidation | None:
    """The artifact installed on `cls`, if it was compiled."""
    return cls.__dict__.get(ARTIFACT_ATTR)
