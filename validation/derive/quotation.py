"""Source emission for field validation routines.

Every (field, rule) pair becomes a short block of Python source; the blocks
are assembled into one ``validate_fields`` function and compiled with
``exec`` into a private namespace holding the rule checks and error types.

How a value is read is decided by the field's passing convention:

    CONTAINER / BORROW / PASSTHROUGH   self.<ident>
    VALUE                              _copy(self.<ident>), unless the rule borrows
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Mapping, Sequence

from .annotations import FieldDescriptor
from .registry import RuleDescriptor
from .types import Passing

ROUTINE_NAME = "validate_fields"

_ACCESSORS: Mapping[Passing, str] = MappingProxyType({
    Passing.CONTAINER: "self.{ident}",
    Passing.BORROW: "self.{ident}",
    Passing.PASSTHROUGH: "self.{ident}",
    Passing.VALUE: "_copy(self.{ident})",
})


class FieldQuoter:
    """Quotes the pieces of a check that depend on the field."""

    __slots__ = ("field",)

    def __init__(self, field: FieldDescriptor):
        self.field = field

    def quote_validate_parameter(self, rule: RuleDescriptor) -> str:
        """Expression handing the field value to `rule`."""
        passing = self.field.type.passing
        if passing is Passing.VALUE and rule.borrows:
            passing = Passing.BORROW
        return _ACCESSORS[passing].format(ident=self.field.ident)


def create_field_validation(quoter: FieldQuoter, rule: RuleDescriptor, binding: str) -> list[str]:
    """Lines of one check: run the rule bound as `binding`, record a mismatch on failure."""
    return [
        f"if not {binding}({quoter.quote_validate_parameter(rule)}):",
        f"    errors.append(_FieldMismatch({rule.code!r}))",
    ]


def quote_routine(blocks: Sequence[list[str]]) -> str:
    """Assemble check blocks into the routine source.

    The routine succeeds iff no check recorded an error and otherwise surfaces
    the first recorded error only.
    """
    lines = [f"def {ROUTINE_NAME}(self):", "    errors = []"]
    for block in blocks:
        lines.extend(f"    {line}" for line in block)
    lines += [
        "    if not errors:",
        "        return _Ok(None)",
        "    return _Err(errors[0])",
    ]
    return "\n".join(lines) + "\n"


def create_fn(source: str, namespace: dict[str, Any], *, filename: str) -> Callable[..., Any]:
    """Compile the routine source and return the function it defines."""
    local: dict[str, Any] = {}
    exec(compile(source, filename, "exec"), namespace, local)
    return local[ROUTINE_NAME]
