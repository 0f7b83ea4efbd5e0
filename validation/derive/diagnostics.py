"""Compile-time diagnostics.

Raised while a DTO class is being compiled, never by a validation routine.
A struct either compiles its whole routine or its definition fails. The
exception is a field type naming something not defined yet: that struct is
compiled on first use, and fails there if the name is still missing.
"""
from __future__ import annotations


class DeriveError(TypeError):
    """Fatal diagnostic for a struct that cannot get a field validation routine."""

    def __init__(
        self,
        message: str,
        *,
        struct: str,
        field: str | None = None,
        help: str | None = None,
    ):
        self.message, self.struct, self.field, self.help = message, struct, field, help
        super().__init__(self._render())

    def _render(self) -> str:
        location = f"{self.struct}.{self.field}" if self.field else self.struct
        text = f"{location}: {self.message}"
        if self.help:
            text += f"\n  = help: {self.help}"
        return text


def invalid_attribute(struct: str, field: str, msg: str) -> DeriveError:
    """Diagnostic for a malformed `validate(...)` annotation."""
    return DeriveError(
        f"Invalid attribute validate on field `{field}`: {msg}",
        struct=struct,
        field=field,
    )


class UnresolvedReference(DeriveError):
    """A field type names something not defined yet.

    Decorated structs defer compilation to first use when this is raised;
    it is only fatal if the name is still missing by then.
    """
