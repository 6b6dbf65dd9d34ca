"""Serialize a resolved pod mapping as a Graphviz DOT digraph."""

from __future__ import annotations

from typing import Sequence, TextIO

from podgraph.core.parser import Pod

GRAPH_NAME = "PodDeps"
GRAPH_SIZE = "8,6"
NODE_FONT_SIZE = 10

# Pods with more dependencies than this get a palette colour.
COLOR_THRESHOLD = 2
DEFAULT_COLOR = "black"

DEFAULT_PALETTE: tuple[str, ...] = (
    "red",
    "blue",
    "green",
    "orange",
    "purple",
    "brown",
    "magenta",
    "cyan4",
    "darkgreen",
    "navy",
    "crimson",
    "gold3",
    "deeppink",
    "darkorange3",
    "dodgerblue",
    "forestgreen",
    "indigo",
    "maroon",
    "olivedrab",
    "steelblue",
)


def assign_colors(
    pods: dict[str, Pod],
    palette: Sequence[str] = DEFAULT_PALETTE,
    threshold: int = COLOR_THRESHOLD,
) -> dict[str, str]:
    """
    Return a colour per pod name, in declaration order.

    Pods whose out-degree exceeds threshold take the next palette entry,
    cycling through the palette; all other pods are black.
    """
    colors: dict[str, str] = {}
    counter = 0
    for name, pod in pods.items():
        if palette and len(pod.dependencies) > threshold:
            colors[name] = palette[counter % len(palette)]
            counter += 1
        else:
            colors[name] = DEFAULT_COLOR
    return colors


def generate_dot(
    pods: dict[str, Pod],
    *,
    color: bool = True,
    palette: Sequence[str] = DEFAULT_PALETTE,
    threshold: int = COLOR_THRESHOLD,
) -> str:
    """Generate DOT text for the resolved pod mapping."""
    lines = [
        f"digraph {GRAPH_NAME} {{",
        f'\tsize="{GRAPH_SIZE}";',
        f"\tnode[fontsize={NODE_FONT_SIZE}];",
    ]
    colors = assign_colors(pods, palette, threshold) if color else {}

    for name, pod in pods.items():
        # Edge attributes apply to edges declared after them, so set the
        # colour first and colour the node once its edges are out.
        if color and pod.dependencies:
            lines.append(f'\tedge[color="{colors[name]}"];')
        for dep in pod.dependencies:
            lines.append(f'\t"{pod.label}" -> "{dep.label}";')
        if color:
            lines.append(f'\t"{pod.label}"[color="{colors[name]}"];')

    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(pods: dict[str, Pod], stream: TextIO, **kwargs) -> None:
    """Write DOT text to stream. The document is built fully before writing."""
    stream.write(generate_dot(pods, **kwargs))
