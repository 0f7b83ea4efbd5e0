"""Rule Registry

Read-only mapping from a rule name token to its descriptor. A registry is
built once from a sequence of descriptors and never mutated; adding a rule
means building a new registry with ``with_rules``, not touching the compiler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterator

from validation.rules import is_not_null


class ValidationType(str, Enum):
    """Names of the built-in validation rules."""
    # The field cannot be None, or 'null' in the case of a DTO field
    NOT_NULL = "not_null"


@dataclass(frozen=True, slots=True)
class RuleDescriptor:
    """A named rule: its diagnostic code and its check procedure.

    `borrows` rules receive the live attribute even for owned fields; other
    rules receive a shallow copy of owned values.
    """
    name: str
    code: str
    check: Callable[[Any], bool]
    borrows: bool = True
    description: str = ""


NOT_NULL = RuleDescriptor(
    name=ValidationType.NOT_NULL.value,
    code=ValidationType.NOT_NULL.value,
    check=is_not_null,
    description="the optional container holds a value",
)

BUILTIN_RULES: tuple[RuleDescriptor, ...] = (NOT_NULL,)


def _key(name: str) -> str:
    # ValidationType members are accepted wherever a rule name is
    return name.value if isinstance(name, Enum) else name


class RuleRegistry:
    """Immutable name -> RuleDescriptor lookup. Lookup is exact and case sensitive."""

    __slots__ = ("_rules",)

    def __init__(self, descriptors: tuple[RuleDescriptor, ...] | list[RuleDescriptor] = BUILTIN_RULES):
        rules: dict[str, RuleDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in rules:
                raise ValueError(f"Rule '{descriptor.name}' registered twice")
            rules[descriptor.name] = descriptor
        self._rules = MappingProxyType(rules)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _key(name) in self._rules

    def __iter__(self) -> Iterator[RuleDescriptor]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({', '.join(self._rules)})"

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._rules)

    def get(self, name: str) -> RuleDescriptor:
        """Get a rule by name. Callers validate names first, so a miss is a KeyError."""
        return self._rules[_key(name)]

    def with_rules(self, *descriptors: RuleDescriptor) -> RuleRegistry:
        """Return a new registry holding these rules plus `descriptors`."""
        return RuleRegistry((*self._rules.values(), *descriptors))


DEFAULT_REGISTRY = RuleRegistry()
