"""Parse the PODS section of a CocoaPods Podfile.lock."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable

from podgraph.core.errors import StructuralError

SECTION_HEADER = "PODS:"

# Indentation (in spaces) of the dash for each kind of entry.
TOP_LEVEL_INDENT = 2
DEPENDENCY_INDENT = 4

# Names are alphanumerics, hyphens and slashes (subspecs); the version is the
# parenthesized run of digits, dots, tildes, '>' and spaces that follows.
_ENTRY_RE = re.compile(
    r'^(?P<indent> *)- "?(?P<name>[A-Za-z0-9\-/]+)(?: \((?P<version>[~> 0-9.]+))?'
)


@dataclass
class Pod:
    """One pod entry: a top-level declaration or a dependency nested under one."""

    name: str
    version: str | None = None
    dependencies: list[Pod] = field(default_factory=list)

    @property
    def label(self) -> str:
        """Node label used in the graph: name and version."""
        return f"{self.name} {self.version}" if self.version else self.name

    def to_dict(self) -> dict:
        """Serialize pod to a JSON-friendly dict."""
        return {
            "name": self.name,
            "version": self.version,
            "dependencies": [
                {"name": d.name, "version": d.version} for d in self.dependencies
            ],
        }


@dataclass
class ParseResult:
    """Pods keyed by name (declaration order) plus the significant lines read."""

    pods: dict[str, Pod]
    line_count: int

    @property
    def dependency_count(self) -> int:
        return sum(len(p.dependencies) for p in self.pods.values())

    @property
    def record_count(self) -> int:
        return len(self.pods) + self.dependency_count

    @property
    def is_consistent(self) -> bool:
        return self.record_count == self.line_count


class LineKind(Enum):
    TOP_LEVEL = "top_level"
    DEPENDENCY = "dependency"
    OTHER = "other"


@dataclass(frozen=True)
class ParsedLine:
    """Result of matching a single line inside the PODS section."""

    kind: LineKind
    name: str | None = None
    version: str | None = None


class ParserState(Enum):
    AWAITING_SECTION = "awaiting_section"
    TOP_LEVEL = "top_level"
    DEPENDENCY = "dependency"


def _is_blank(line: str) -> bool:
    return not line.strip()


def match_line(line: str) -> ParsedLine:
    """Classify a section line by indentation and extract name and version."""
    m = _ENTRY_RE.match(line.rstrip("\r\n"))
    if m is None:
        return ParsedLine(LineKind.OTHER)
    indent = len(m.group("indent"))
    if indent == TOP_LEVEL_INDENT:
        kind = LineKind.TOP_LEVEL
    elif indent == DEPENDENCY_INDENT:
        kind = LineKind.DEPENDENCY
    else:
        return ParsedLine(LineKind.OTHER)
    version = m.group("version")
    if version is not None:
        version = version.strip() or None
    return ParsedLine(kind, name=m.group("name"), version=version)


def parse_lock_lines(lines: Iterable[str]) -> ParseResult:
    """
    Parse Podfile.lock lines into a mapping of pod name to Pod.

    Lines before the PODS: header are skipped and the first blank line after
    it ends the section. Every line read inside the section counts as
    significant, including lines that match neither entry pattern (those are
    ignored, so the integrity check will flag them).

    Raises:
        StructuralError: a dependency line appears before any top-level pod.
    """
    pods: dict[str, Pod] = {}
    line_count = 0
    state = ParserState.AWAITING_SECTION
    current: Pod | None = None

    for line_no, line in enumerate(lines, start=1):
        if state is ParserState.AWAITING_SECTION:
            if line.strip() == SECTION_HEADER:
                state = ParserState.TOP_LEVEL
                current = None
            continue
        if _is_blank(line):
            break

        line_count += 1
        parsed = match_line(line)
        if parsed.kind is LineKind.TOP_LEVEL:
            current = Pod(parsed.name, parsed.version)
            # Last declaration wins but keeps the first declaration's slot.
            pods[current.name] = current
            state = ParserState.TOP_LEVEL
        elif parsed.kind is LineKind.DEPENDENCY:
            if current is None:
                raise StructuralError(
                    f"Dependency on line {line_no} has no enclosing pod: {line.strip()!r}",
                    line_no=line_no,
                    line=line.rstrip("\r\n"),
                )
            current.dependencies.append(Pod(parsed.name, parsed.version))
            state = ParserState.DEPENDENCY

    return ParseResult(pods=pods, line_count=line_count)


def parse_lock_file(path: Path) -> ParseResult:
    """Parse a Podfile.lock from disk. OSError propagates if it cannot be read."""
    with open(path, "r", encoding="utf-8") as infile:
        return parse_lock_lines(infile)


def check_integrity(result: ParseResult) -> None:
    """Raise StructuralError unless pods + dependencies == significant lines."""
    if result.is_consistent:
        return
    raise StructuralError(
        f"Parsing error: read {result.line_count} entries in PODS section but "
        f"built {result.record_count} records ({len(result.pods)} pods, "
        f"{result.dependency_count} dependencies)",
        expected=result.line_count,
        actual=result.record_count,
    )
