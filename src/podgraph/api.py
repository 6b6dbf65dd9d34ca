"""Public API: use podgraph from Python or from other tools."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from podgraph.core.emitter import COLOR_THRESHOLD, DEFAULT_PALETTE, generate_dot
from podgraph.core.parser import Pod, check_integrity, parse_lock_file
from podgraph.core.resolver import resolve_versions


def load_pods(path: Path | str, *, check: bool = True) -> dict[str, Pod]:
    """
    Parse a Podfile.lock and resolve dependency versions.

    Args:
        path: Path to the Podfile.lock.
        check: If True, verify that every line in the PODS section produced
            a record and raise StructuralError otherwise.

    Returns:
        Mapping of pod name to resolved Pod, in declaration order.

    Raises:
        OSError: the file cannot be read.
        StructuralError: the PODS section is malformed.
        UnresolvedDependencyError: a dependency has no top-level entry.
    """
    result = parse_lock_file(Path(path))
    if check:
        check_integrity(result)
    resolve_versions(result.pods)
    return result.pods


def build_dot(
    path: Path | str,
    *,
    check: bool = True,
    color: bool = True,
    palette: Sequence[str] = DEFAULT_PALETTE,
    threshold: int = COLOR_THRESHOLD,
) -> str:
    """Load a Podfile.lock and return its dependency graph as DOT text."""
    pods = load_pods(path, check=check)
    return generate_dot(pods, color=color, palette=palette, threshold=threshold)


def format_summary(pods: dict[str, Pod]) -> str:
    """One `name,version,count` line per pod, each dependency as `...name,version`."""
    lines: list[str] = []
    for name, pod in pods.items():
        lines.append(f"{name},{pod.version or ''},{len(pod.dependencies)}")
        for dep in pod.dependencies:
            lines.append(f"...{dep.name},{dep.version or ''}")
    return "\n".join(lines)


def pods_to_dict(pods: dict[str, Pod]) -> list[dict]:
    """Serialize pods to a JSON-friendly list."""
    return [pod.to_dict() for pod in pods.values()]
