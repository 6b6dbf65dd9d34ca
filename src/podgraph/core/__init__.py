"""Core library: Podfile.lock parsing, version resolution, DOT emission."""

from podgraph.core.emitter import DEFAULT_PALETTE, assign_colors, generate_dot, write_dot
from podgraph.core.errors import PodGraphError, StructuralError, UnresolvedDependencyError
from podgraph.core.parser import (
    ParseResult,
    Pod,
    check_integrity,
    parse_lock_file,
    parse_lock_lines,
)
from podgraph.core.resolver import dependents, resolve_versions

__all__ = [
    "DEFAULT_PALETTE",
    "assign_colors",
    "generate_dot",
    "write_dot",
    "PodGraphError",
    "StructuralError",
    "UnresolvedDependencyError",
    "ParseResult",
    "Pod",
    "check_integrity",
    "parse_lock_file",
    "parse_lock_lines",
    "dependents",
    "resolve_versions",
]
