"""Replace dependency version constraints with concrete pod versions."""

from __future__ import annotations

from podgraph.core.errors import UnresolvedDependencyError
from podgraph.core.parser import Pod


def resolve_versions(pods: dict[str, Pod]) -> None:
    """
    Overwrite each dependency's version with its top-level pod's version.

    Assumes a lock file declares a single version per pod. Every lookup is
    done before anything is written, so on error the mapping is unchanged.
    Calling it again on a resolved mapping changes nothing.

    Raises:
        UnresolvedDependencyError: a dependency has no top-level entry.
    """
    updates: list[tuple[Pod, str | None]] = []
    for pod in pods.values():
        for dep in pod.dependencies:
            target = pods.get(dep.name)
            if target is None:
                raise UnresolvedDependencyError(dep.name, parent=pod.name)
            updates.append((dep, target.version))

    for dep, version in updates:
        dep.version = version


def dependents(pods: dict[str, Pod]) -> dict[str, list[str]]:
    """Map each pod name to the names of pods that depend on it (reverse edges)."""
    reverse: dict[str, list[str]] = {name: [] for name in pods}
    for pod in pods.values():
        for dep in pod.dependencies:
            reverse.setdefault(dep.name, []).append(pod.name)
    return reverse
