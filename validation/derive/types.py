"""Type Classifier

Decides how a field's value is handed to a rule check. The decision is made
from a normalized textual rendering of the declared type (``Optional[int]``,
``list[str]``, ``ReferenceType[Node]``) against an ordered table, so new type
shapes are added as table rows rather than branches in the compiler.
"""
from __future__ import annotations

import collections.abc
import re
import types
from dataclasses import dataclass
from enum import Enum
from typing import (
    Annotated, Any, Callable, ForwardRef, Literal, Mapping, ParamSpec, TypeVar, Union,
    get_args, get_origin,
)

from .diagnostics import DeriveError, UnresolvedReference

_UNION_ORIGINS = (Union, types.UnionType)
_CALLABLE_ORIGINS = (collections.abc.Callable,)


class TypeTag(str, Enum):
    """Semantic classification of a field type."""
    OPTIONAL = "optional"
    STRING_LIKE = "string_like"
    NUMERIC = "numeric"
    REFERENCE = "reference"
    OWNED = "owned"


class Passing(str, Enum):
    """How a field value is handed to a rule check."""
    CONTAINER = "container"      # the optional container itself
    BORROW = "borrow"            # the attribute, immutable so shared
    PASSTHROUGH = "passthrough"  # already a reference, handed over as is
    VALUE = "value"              # a shallow copy of the attribute


STRING_TYPES = frozenset({"str", "bytes", "LiteralString", "SecretStr", "SecretBytes"})

# Optional-wrapped numerics are caught by the OPTIONAL row first
NUMBER_TYPES = frozenset({"int", "float", "complex", "bool", "Decimal", "Fraction"})

REFERENCE_TYPE = re.compile(
    r"^(?:ReferenceType|weakproxy|weakcallableproxy|memoryview|mappingproxy)(?:\[.*\])?$"
)

CLASSIFIERS: tuple[tuple[Callable[[str], Any], TypeTag], ...] = (
    (lambda text: text.startswith("Optional["), TypeTag.OPTIONAL),
    (lambda text: text in STRING_TYPES, TypeTag.STRING_LIKE),
    (lambda text: text in NUMBER_TYPES, TypeTag.NUMERIC),
    (REFERENCE_TYPE.match, TypeTag.REFERENCE),
)

PASSING: Mapping[TypeTag, Passing] = types.MappingProxyType({
    TypeTag.OPTIONAL: Passing.CONTAINER,
    TypeTag.STRING_LIKE: Passing.BORROW,
    TypeTag.NUMERIC: Passing.BORROW,
    TypeTag.REFERENCE: Passing.PASSTHROUGH,
    TypeTag.OWNED: Passing.VALUE,
})


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Textual rendering of a declared type plus its classification."""
    text: str
    tag: TypeTag

    @property
    def passing(self) -> Passing:
        return PASSING[self.tag]


def strip_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[X, *meta]`` into ``(X, meta)``; other types pass through."""
    if get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        return base, tuple(metadata)
    return annotation, ()


def render_type(annotation: Any) -> str:
    """Render a type as compact text without whitespace, e.g. ``Optional[dict[str,int]]``."""
    annotation, _ = strip_annotated(annotation)
    if annotation is None or annotation is type(None):
        return "None"
    if annotation is Ellipsis:
        return "..."

    origin, args = get_origin(annotation), get_args(annotation)
    if origin in _UNION_ORIGINS:
        members = [a for a in args if a is not type(None)]
        inner = (render_type(members[0]) if len(members) == 1
                 else f"Union[{','.join(render_type(m) for m in members)}]")
        return f"Optional[{inner}]" if len(members) < len(args) else inner
    if origin is Literal:
        return f"Literal[{','.join(repr(a) for a in args)}]"
    if origin is not None:
        name = getattr(origin, "__name__", None) or repr(origin)
        if not args:
            return name
        return f"{name}[{','.join(_render_arg(a) for a in args)}]"
    if isinstance(annotation, (TypeVar, ParamSpec)):
        return annotation.__name__
    if isinstance(annotation, ForwardRef):
        return annotation.__forward_arg__
    if isinstance(annotation, str):
        return annotation.replace(" ", "")
    return getattr(annotation, "__name__", None) or repr(annotation).replace(" ", "")


def _render_arg(arg: Any) -> str:
    # Callable parameter lists arrive as plain lists
    if isinstance(arg, list):
        return f"[{','.join(render_type(a) for a in arg)}]"
    return render_type(arg)


def _unsupported_reason(annotation: Any) -> str | None:
    if isinstance(annotation, (TypeVar, ParamSpec)):
        return "unresolved generic parameter"
    if isinstance(annotation, (str, ForwardRef)):
        return "unresolved forward reference"
    if annotation in _CALLABLE_ORIGINS or get_origin(annotation) in _CALLABLE_ORIGINS:
        return "callable types cannot be validated as fields"
    return None


def classify(text: str) -> TypeTag:
    """Classify a rendered type against the ordered classifier table."""
    for matches, tag in CLASSIFIERS:
        if matches(text):
            return tag
    return TypeTag.OWNED


def describe_type(struct: str, field: str, annotation: Any) -> TypeDescriptor:
    """Describe the declared type of `field`, failing on shapes that cannot be modeled."""
    base, _ = strip_annotated(annotation)
    if reason := _unsupported_reason(base):
        error = UnresolvedReference if isinstance(base, (str, ForwardRef)) else DeriveError
        raise error(
            f"Type `{render_type(base)}` of field `{field}` not supported: {reason}",
            struct=struct,
            field=field,
        )
    text = render_type(base)
    return TypeDescriptor(text=text, tag=classify(text))
