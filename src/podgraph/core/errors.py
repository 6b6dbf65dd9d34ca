"""Exceptions raised while parsing and resolving a Podfile.lock."""

from __future__ import annotations


class PodGraphError(Exception):
    """Base class for podgraph errors."""


class StructuralError(PodGraphError):
    """The PODS section does not have the shape the parser expects.

    Raised for a dependency line with no enclosing top-level pod, and when the
    number of parsed records does not match the number of lines consumed.
    """

    def __init__(
        self,
        message: str,
        *,
        line_no: int | None = None,
        line: str | None = None,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        super().__init__(message)
        self.line_no = line_no
        self.line = line
        self.expected = expected
        self.actual = actual


class UnresolvedDependencyError(PodGraphError):
    """A dependency names a pod that has no top-level entry."""

    def __init__(self, name: str, parent: str | None = None) -> None:
        if parent:
            message = f"Unresolved dependency: {name} (required by {parent})"
        else:
            message = f"Unresolved dependency: {name}"
        super().__init__(message)
        self.name = name
        self.parent = parent
