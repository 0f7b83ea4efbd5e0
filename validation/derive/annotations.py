"""Annotation Parser

Walks a struct's fields and reads two independent annotation families:

- rule annotations, written as ``Annotated[T, validate("not_null")]``
- the serialization rename, read from pydantic's ``Field(alias=...)`` /
  ``Field(serialization_alias=...)`` and consumed only for bookkeeping

The field's value is always read through its declared identity; the rename
only changes the externally visible name.

Usage:
    @field_validate
    @dataclass
    class Required:
        val: Annotated[Optional[Item], validate("not_null")]
        val_2: Annotated[Optional[Item], Field(alias="valTwo"), validate("not_null")]
"""
from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, NamedTuple, get_origin, get_type_hints

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from .diagnostics import DeriveError, UnresolvedReference, invalid_attribute
from .registry import RuleDescriptor, RuleRegistry, ValidationType
from .types import TypeDescriptor, describe_type, render_type, strip_annotated


@dataclass(frozen=True, slots=True)
class Validate:
    """Rule annotation: the rule-name tokens exactly as written on the field."""
    rules: tuple[Any, ...]
    options: tuple[tuple[str, Any], ...] = ()


def validate(*rules: str | ValidationType, **options: Any) -> Validate:
    """Declare the validation rules a field must satisfy, in order.

    Keyword arguments are not part of the annotation language; they are kept
    only so the compiler can report them against the offending field.
    """
    return Validate(rules=tuple(rules), options=tuple(options.items()))


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One struct field as seen by the compiler."""
    ident: str   # attribute used to read the value
    name: str    # externally visible name, after any rename
    type: TypeDescriptor


class RawField(NamedTuple):
    ident: str
    annotation: Any
    metadata: tuple[Any, ...]


class ParsedField(NamedTuple):
    field: FieldDescriptor
    rules: tuple[RuleDescriptor, ...]


def _struct_name(cls: Any) -> str:
    return getattr(cls, "__qualname__", None) or repr(cls)


def _field_mentioning(cls: type, name: str | None) -> str | None:
    """Best-effort lookup of the field whose annotation names `name`."""
    if not name or not dataclasses.is_dataclass(cls):
        return None
    pattern = re.compile(rf"\b{re.escape(name)}\b")
    for f in dataclasses.fields(cls):
        if pattern.search(render_type(f.type)):
            return f.name
    return None


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except NameError as exc:
        missing = getattr(exc, "name", None)
        field = _field_mentioning(cls, missing)
        raise UnresolvedReference(
            f"Type of field `{field or '?'}` not supported: unresolved forward reference `{missing}`",
            struct=_struct_name(cls),
            field=field,
        ) from exc


def _is_classvar(annotation: Any) -> bool:
    base, _ = strip_annotated(annotation)
    return base is ClassVar or get_origin(base) is ClassVar


def struct_fields(cls: Any) -> list[RawField]:
    """Enumerate the named fields of a struct, in declaration order."""
    struct = _struct_name(cls)
    if not isinstance(cls, type) or issubclass(cls, Enum):
        raise DeriveError("`field_validate` can only be used with structs", struct=struct)

    if issubclass(cls, BaseModel):
        if not cls.__pydantic_complete__:
            raise UnresolvedReference(
                "model is not fully defined",
                struct=struct,
                help=f"define the referenced types, then call `{cls.__name__}.model_rebuild()`",
            )
        # pydantic keeps unknown Annotated metadata on the FieldInfo
        return [
            RawField(ident, info.annotation, (*info.metadata, info))
            for ident, info in cls.model_fields.items()
        ]

    if issubclass(cls, tuple) and not hasattr(cls, "_fields"):
        raise DeriveError(
            "struct has unnamed fields",
            struct=struct,
            help="`field_validate` can only be used on structs with named fields",
        )

    hints = _type_hints(cls)
    if dataclasses.is_dataclass(cls):
        idents = [f.name for f in dataclasses.fields(cls)]
        defaults = {f.name: f.default for f in dataclasses.fields(cls)}
    elif issubclass(cls, tuple):
        idents, defaults = list(cls._fields), {}
    else:
        idents, defaults = [n for n, h in hints.items() if not _is_classvar(h)], {}

    fields = []
    for ident in idents:
        annotation, metadata = strip_annotated(hints.get(ident, Any))
        if isinstance(default := defaults.get(ident), FieldInfo):
            metadata = (*metadata, default)
        fields.append(RawField(ident, annotation, metadata))
    return fields


def resolve_name(struct: str, raw: RawField) -> str:
    """Externally visible name: the last rename target found, else the identity."""
    name = raw.ident
    for item in raw.metadata:
        if not isinstance(item, FieldInfo):
            continue
        target = item.serialization_alias or item.alias
        if target is None:
            continue
        if not isinstance(target, str):
            raise DeriveError(
                f"Invalid rename on field `{raw.ident}`: expected a string target, got {type(target).__name__}",
                struct=struct,
                field=raw.ident,
            )
        name = target
    return name


def find_validations(struct: str, raw: RawField, registry: RuleRegistry) -> tuple[RuleDescriptor, ...]:
    """Resolve every rule annotation on the field against the registry, in order."""
    rules: list[RuleDescriptor] = []
    for item in raw.metadata:
        if item is validate:
            raise invalid_attribute(struct, raw.ident, "expected `validate(...)` with rule names, got bare `validate`")
        if not isinstance(item, Validate):
            continue
        if item.options:
            raise invalid_attribute(struct, raw.ident, f"unexpected name=value argument `{item.options[0][0]}`")
        if not item.rules:
            raise invalid_attribute(struct, raw.ident, "there must be at least one validation rule")

        for token in item.rules:
            if not isinstance(token, str):
                raise invalid_attribute(
                    struct, raw.ident, f"unexpected nested value {token!r}; expected a rule name"
                )
            if token not in registry:
                raise DeriveError(
                    f"Unexpected validation `{token}` on field `{raw.ident}`",
                    struct=struct,
                    field=raw.ident,
                    help=f"registered rules: {', '.join(registry.names) or 'none'}",
                )
            rules.append(registry.get(token))
    return tuple(rules)


def parse_struct(cls: type, registry: RuleRegistry) -> list[ParsedField]:
    """Resolve (identity, external name, type, requested rules) for every field."""
    struct = _struct_name(cls)
    parsed = []
    for raw in struct_fields(cls):
        field = FieldDescriptor(
            ident=raw.ident,
            name=resolve_name(struct, raw),
            type=describe_type(struct, raw.ident, raw.annotation),
        )
        parsed.append(ParsedField(field, find_validations(struct, raw, registry)))
    return parsed
