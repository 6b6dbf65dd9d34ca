"""podgraph: turn a CocoaPods Podfile.lock into a Graphviz dependency graph (library, CLI, TUI)."""

from importlib.metadata import version, PackageNotFoundError

from podgraph.api import (
    build_dot,
    format_summary,
    load_pods,
    pods_to_dict,
)
from podgraph.core.errors import PodGraphError, StructuralError, UnresolvedDependencyError
from podgraph.core.parser import Pod

__all__ = [
    "build_dot",
    "format_summary",
    "load_pods",
    "pods_to_dict",
    "Pod",
    "PodGraphError",
    "StructuralError",
    "UnresolvedDependencyError",
    "__version__",
]

try:
    __version__ = version("podgraph")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed as package
