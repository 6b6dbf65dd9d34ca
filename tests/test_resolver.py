"""Tests for podgraph.core.resolver."""

from __future__ import annotations

import copy

import pytest

from podgraph.core.errors import UnresolvedDependencyError
from podgraph.core.parser import Pod, parse_lock_lines
from podgraph.core.resolver import dependents, resolve_versions


def _pods(text: str) -> dict[str, Pod]:
    return parse_lock_lines(text.splitlines(keepends=True)).pods


class TestResolveVersions:
    """Tests for resolve_versions."""

    def test_constraint_replaced_with_concrete_version(self) -> None:
        pods = _pods("PODS:\n  - A (1.0):\n    - B (~> 0.5)\n  - B (2.0)\n")
        resolve_versions(pods)
        assert pods["A"].dependencies[0].version == "2.0"
        assert pods["A"].version == "1.0"
        assert pods["B"].version == "2.0"

    def test_missing_constraint_filled_in(self) -> None:
        pods = _pods("PODS:\n  - A (1.0):\n    - B\n  - B (3.1.4)\n")
        resolve_versions(pods)
        assert pods["A"].dependencies[0].version == "3.1.4"

    def test_dependency_on_unversioned_pod(self) -> None:
        pods = _pods("PODS:\n  - A (1.0):\n    - B (~> 1)\n  - B\n")
        resolve_versions(pods)
        assert pods["A"].dependencies[0].version is None

    def test_dependency_records_stay_separate(self) -> None:
        pods = _pods("PODS:\n  - A (1.0):\n    - B (~> 0.5)\n  - B (2.0)\n")
        resolve_versions(pods)
        assert pods["A"].dependencies[0] is not pods["B"]

    def test_idempotent(self) -> None:
        pods = _pods(
            "PODS:\n"
            "  - A (1.0):\n"
            "    - B (~> 0.5)\n"
            "    - C (> 0.1)\n"
            "  - B (2.0):\n"
            "    - C\n"
            "  - C (0.3)\n"
        )
        resolve_versions(pods)
        snapshot = copy.deepcopy(pods)
        resolve_versions(pods)
        assert pods == snapshot

    def test_unresolved_names_missing_pod(self) -> None:
        pods = _pods("PODS:\n  - A (1.0):\n    - C (1.0)\n  - B (2.0)\n")
        with pytest.raises(UnresolvedDependencyError) as excinfo:
            resolve_versions(pods)
        assert excinfo.value.name == "C"
        assert excinfo.value.parent == "A"
        assert "C" in str(excinfo.value)

    def test_failure_leaves_mapping_untouched(self) -> None:
        pods = _pods(
            "PODS:\n"
            "  - A (1.0):\n"
            "    - B (~> 0.5)\n"
            "    - Missing (1.0)\n"
            "  - B (2.0)\n"
        )
        with pytest.raises(UnresolvedDependencyError):
            resolve_versions(pods)
        assert pods["A"].dependencies[0].version == "~> 0.5"

    def test_empty_mapping(self) -> None:
        pods: dict[str, Pod] = {}
        resolve_versions(pods)
        assert pods == {}


class TestDependents:
    """Tests for dependents (reverse edges)."""

    def test_reverse_edges(self) -> None:
        pods = _pods(
            "PODS:\n"
            "  - A (1.0):\n"
            "    - C\n"
            "  - B (1.0):\n"
            "    - C\n"
            "  - C (1.0)\n"
        )
        reverse = dependents(pods)
        assert reverse["C"] == ["A", "B"]
        assert reverse["A"] == []
        assert reverse["B"] == []
