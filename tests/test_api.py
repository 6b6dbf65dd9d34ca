"""Tests for podgraph.api module."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

import podgraph
from podgraph.api import build_dot, format_summary, load_pods, pods_to_dict
from podgraph.core.errors import StructuralError, UnresolvedDependencyError

EXAMPLE_LOCK = "PODS:\n  - A (1.0):\n    - B (~> 0.5)\n  - B (2.0)\n\nDEPENDENCIES:\n  - A\n"


@pytest.fixture
def example_lock(tmp_path: Path) -> Path:
    lock = tmp_path / "Podfile.lock"
    lock.write_text(EXAMPLE_LOCK)
    return lock


class TestModuleExports:
    """Tests for podgraph module-level exports."""

    def test_version_is_string(self) -> None:
        assert isinstance(podgraph.__version__, str)

    def test_version_format(self) -> None:
        pattern = r"^\d+\.\d+\.\d+(\+.+)?$"
        assert re.match(pattern, podgraph.__version__), f"Invalid version: {podgraph.__version__}"

    def test_exports(self) -> None:
        for name in podgraph.__all__:
            assert hasattr(podgraph, name)


class TestLoadPods:
    """Tests for load_pods."""

    def test_resolves_versions(self, example_lock: Path) -> None:
        pods = load_pods(example_lock)
        assert list(pods) == ["A", "B"]
        assert pods["A"].dependencies[0].version == "2.0"

    def test_accepts_str_path(self, example_lock: Path) -> None:
        assert "A" in load_pods(str(example_lock))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_pods(tmp_path / "nope.lock")

    def test_integrity_failure(self, tmp_path: Path) -> None:
        lock = tmp_path / "Podfile.lock"
        lock.write_text("PODS:\n  - A (1.0)\n        - stray\n")
        with pytest.raises(StructuralError):
            load_pods(lock)

    def test_integrity_check_can_be_disabled(self, tmp_path: Path) -> None:
        lock = tmp_path / "Podfile.lock"
        lock.write_text("PODS:\n  - A (1.0)\n        - stray\n")
        assert list(load_pods(lock, check=False)) == ["A"]

    def test_unresolved(self, tmp_path: Path) -> None:
        lock = tmp_path / "Podfile.lock"
        lock.write_text("PODS:\n  - A (1.0):\n    - C (1.0)\n  - B (2.0)\n")
        with pytest.raises(UnresolvedDependencyError) as excinfo:
            load_pods(lock)
        assert excinfo.value.name == "C"


class TestBuildDot:
    """Tests for build_dot."""

    def test_end_to_end(self, example_lock: Path) -> None:
        dot = build_dot(example_lock)
        assert '\t"A 1.0" -> "B 2.0";' in dot
        assert '\t"A 1.0"[color="black"];' in dot
        assert dot.startswith("digraph PodDeps {\n")
        assert dot.endswith("}\n")

    def test_deterministic(self, example_lock: Path) -> None:
        assert build_dot(example_lock) == build_dot(example_lock)

    def test_plain(self, example_lock: Path) -> None:
        assert "color" not in build_dot(example_lock, color=False)


class TestFormatSummary:
    def test_summary(self, example_lock: Path) -> None:
        assert format_summary(load_pods(example_lock)) == "A,1.0,1\n...B,2.0\nB,2.0,0"


class TestPodsToDict:
    def test_serializes_in_order(self, example_lock: Path) -> None:
        data = pods_to_dict(load_pods(example_lock))
        assert [d["name"] for d in data] == ["A", "B"]
        assert data[0]["dependencies"] == [{"name": "B", "version": "2.0"}]
