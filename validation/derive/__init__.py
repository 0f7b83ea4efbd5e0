"""Declarative field validation.

Fields opt into rules through ``typing.Annotated`` metadata; the compiler
turns those annotations into a ``validate_fields`` routine once per struct.

Key components:
- validate(...): rule annotation
- field_validate: class decorator installing the routine
- RuleRegistry: name -> rule lookup, extended by building a new registry
- DeriveError: raised while a struct is being defined, never at validation time
  (an unresolved forward reference is reported on first use instead)
"""
from .annotations import FieldDescriptor, ParsedField, Validate, parse_struct, validate
from .compiler import (
    CompiledCheck,
    CompiledValidation,
    compile_field_validation,
    compiled_validation,
    field_validate,
)
from .diagnostics import DeriveError, UnresolvedReference
from .registry import (
    BUILTIN_RULES,
    DEFAULT_REGISTRY,
    NOT_NULL,
    RuleDescriptor,
    RuleRegistry,
    ValidationType,
)
from .types import Passing, TypeDescriptor, TypeTag, classify, describe_type, render_type

__all__ = [
    # Annotations
    "validate",
    "Validate",
    "FieldDescriptor",
    "ParsedField",
    "parse_struct",
    # Compiler
    "field_validate",
    "compile_field_validation",
    "compiled_validation",
    "CompiledCheck",
    "CompiledValidation",
    "DeriveError",
    "UnresolvedReference",
    # Registry
    "ValidationType",
    "RuleDescriptor",
    "RuleRegistry",
    "NOT_NULL",
    "BUILTIN_RULES",
    "DEFAULT_REGISTRY",
    # Types
    "TypeTag",
    "Passing",
    "TypeDescriptor",
    "classify",
    "describe_type",
    "render_type",
]
