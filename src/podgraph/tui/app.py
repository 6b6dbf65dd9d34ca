"""Textual TUI for browsing the pod dependency graph of a Podfile.lock."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, Static, Tree
from textual.widgets.tree import TreeNode
from textual.worker import Worker, WorkerState

from podgraph.api import load_pods
from podgraph.core.emitter import DEFAULT_COLOR, assign_colors
from podgraph.core.parser import Pod
from podgraph.core.resolver import dependents

# Limits to avoid huge trees
MAX_TREE_DEPTH = 6
MAX_TREE_NODES = 2000

COLOR_HEADER = "bold magenta"
COLOR_PKG = "white"
COLOR_STATS = "cyan"
COLOR_PATH = "dim"


def _pod_label(pod: Pod, color: str = DEFAULT_COLOR) -> str:
    """Tree label: coloured name, version and dependency count."""
    style = COLOR_PKG if color == DEFAULT_COLOR else f"bold {color}"
    count = len(pod.dependencies)
    deps = f" [dim]({count} dep{'s' if count != 1 else ''})[/]" if count else ""
    return f"[{style}]{pod.name}[/] [dim]v{pod.version or '?'}[/]{deps}"


def _populate_pod_tree(
    tn: TreeNode,
    pod: Pod,
    pods: dict[str, Pod],
    colors: dict[str, str],
    *,
    depth: int = 0,
    max_depth: int = MAX_TREE_DEPTH,
    max_nodes: int = MAX_TREE_NODES,
    node_count: list[int] | None = None,
    path: tuple[str, ...] = (),
) -> None:
    """Add a pod's dependencies under tn, following them through the top-level map."""
    if node_count is None:
        node_count = [0]
    path = path + (pod.name,)
    for dep in pod.dependencies:
        if node_count[0] >= max_nodes:
            tn.add_leaf(f"[dim]… truncated ({max_nodes} nodes max)[/]")
            return
        target = pods.get(dep.name, dep)
        if dep.name in path:
            tn.add_leaf(f"[dim]{dep.name} (cycle)[/]")
            continue
        if depth >= max_depth:
            tn.add_leaf(f"[dim]{dep.name} …[/]")
            continue
        node_count[0] += 1
        label = _pod_label(target, colors.get(dep.name, DEFAULT_COLOR))
        if target.dependencies:
            child_tn = tn.add(label, expand=False)
        else:
            child_tn = tn.add_leaf(label)
        child_tn.data = target
        _populate_pod_tree(
            child_tn,
            target,
            pods,
            colors,
            depth=depth + 1,
            max_depth=max_depth,
            max_nodes=max_nodes,
            node_count=node_count,
            path=path,
        )


def _format_pod(pod: Pod, required_by: list[str], color: str = DEFAULT_COLOR) -> str:
    """Details panel text for a pod."""
    lines = [
        f"[{COLOR_HEADER}]Pod[/]",
        f"  [{COLOR_PKG}]{pod.name}[/]  [dim]v{pod.version or '?'}[/]",
        "",
        f"[{COLOR_HEADER}]Stats[/]",
        f"  Direct dependencies:  [{COLOR_STATS}]{len(pod.dependencies)}[/]",
        f"  Dependents:           [{COLOR_STATS}]{len(required_by)}[/]",
        f"  Graph colour:         [{COLOR_STATS}]{color}[/]",
    ]
    if required_by:
        lines += ["", f"[{COLOR_HEADER}]Required by[/]"]
        lines += [f"  [{COLOR_PATH}]{name}[/]" for name in required_by]
    return "\n".join(lines)


class SearchScreen(ModalScreen[str | None]):
    """Modal to search for pods in the tree. Keyboard-only."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    SearchScreen {
        align: center middle;
        padding: 2 4;
    }
    SearchScreen #search_title {
        text-align: center;
        padding-bottom: 1;
    }
    SearchScreen #search_input {
        width: 60;
        margin: 1 0;
    }
    SearchScreen #search_hint {
        text-align: center;
        padding-top: 1;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._input: Input | None = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(
                "[bold cyan]Search[/]\n\nType a pod name or partial match to find in the tree.",
                id="search_title",
                markup=True,
            )
            yield Input(placeholder="pod name...", id="search_input")
            yield Static(
                "[dim]Enter[/] = Search  ·  [dim]Escape[/] = Cancel\n"
                "[dim]After search: [bold]n[/bold] = next match, [bold]N[/bold] = previous[/]",
                id="search_hint",
                markup=True,
            )

    def on_mount(self) -> None:
        self._input = self.query_one("#search_input", Input)
        self._input.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "search_input":
            return
        value = self._input.value.strip() if self._input else ""
        self.dismiss(value if value else None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class PodTreeApp(App[None]):
    """Terminal UI to explore the pods and dependencies of a Podfile.lock."""

    TITLE = "podgraph"
    BINDINGS = [
        Binding("/", "search", "Search"),
        Binding("n", "next_match", "Next match", show=False),
        Binding("N", "prev_match", "Prev match", show=False),
        Binding("d", "toggle_details", "Details"),
        Binding("r", "refresh", "Reload"),
        Binding("e", "expand_all", "Expand all"),
        Binding("c", "collapse_all", "Collapse"),
        Binding("q", "quit", "Quit"),
    ]

    DEFAULT_CSS = """
    #details {
        padding: 1 2;
        border: solid $primary;
        height: auto;
        min-height: 8;
    }
    """

    def __init__(self, lock_path: Path, *, check: bool = True, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._lock_path = Path(lock_path)
        self._check = check
        self._pods: dict[str, Pod] = {}
        self._colors: dict[str, str] = {}
        self._dependents: dict[str, list[str]] = {}
        self._search_matches: list[TreeNode] = []
        self._search_index: int = 0
        self._details_visible: bool = True

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield Tree("Pods", id="dep_tree")
        yield Static("[dim]Loading...[/]", id="details", markup=True)
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = str(self._lock_path)
        self._start_load()

    def _start_load(self) -> None:
        self._set_details(f"[dim]Reading {self._lock_path}...[/]")
        self.run_worker(self._load_worker, thread=True, exit_on_error=False)

    def _load_worker(self) -> dict[str, Pod]:
        """Worker that parses and resolves the lock file in a background thread."""
        return load_pods(self._lock_path, check=self._check)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.state == WorkerState.SUCCESS:
            self._show_pods(event.worker.result)
        elif event.state == WorkerState.ERROR:
            self._set_details(f"[red]Error: {event.worker.error!s}[/]")

    def _clear_tree(self, tree: Tree) -> None:
        while tree.root.children:
            tree.root.children[0].remove()

    def _show_pods(self, pods: dict[str, Pod]) -> None:
        self._pods = pods
        self._colors = assign_colors(pods)
        self._dependents = dependents(pods)
        tree = self.query_one("#dep_tree", Tree)
        self._clear_tree(tree)
        edges = sum(len(p.dependencies) for p in pods.values())
        tree.root.label = f"[{COLOR_HEADER}]{self._lock_path.name}[/] [dim]({len(pods)} pods)[/]"
        tree.root.expand()
        node_count = [0]
        for name, pod in pods.items():
            label = _pod_label(pod, self._colors[name])
            if pod.dependencies:
                tn = tree.root.add(label, expand=False)
            else:
                tn = tree.root.add_leaf(label)
            tn.data = pod
            _populate_pod_tree(tn, pod, pods, self._colors, node_count=node_count)
        self._set_details(
            f"[{COLOR_HEADER}]{self._lock_path.name}[/]\n\n"
            f"Pods: [{COLOR_STATS}]{len(pods)}[/]  ·  Edges: [{COLOR_STATS}]{edges}[/]\n\n"
            "[dim]↑/↓[/] move  ·  [dim]Enter[/]/[dim]Space[/] select  ·  [dim]/[/] search"
        )
        tree.focus()

    def _set_details(self, text: str) -> None:
        details = self.query_one("#details", Static)
        details.update(text)

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        pod = event.node.data
        if not isinstance(pod, Pod):
            return
        self._set_details(
            _format_pod(
                pod,
                self._dependents.get(pod.name, []),
                self._colors.get(pod.name, DEFAULT_COLOR),
            )
        )

    def action_refresh(self) -> None:
        self._search_matches = []
        self._start_load()

    def action_expand_all(self) -> None:
        self.query_one("#dep_tree", Tree).root.expand_all()

    def action_collapse_all(self) -> None:
        tree = self.query_one("#dep_tree", Tree)
        tree.root.collapse_all()
        tree.root.expand()

    def action_search(self) -> None:
        self.push_screen(SearchScreen(), self._on_search_done)

    def _on_search_done(self, query: str | None) -> None:
        if not query:
            return
        self._search_matches = []
        self._search_index = 0
        tree = self.query_one("#dep_tree", Tree)
        self._collect_matches(tree.root, query.lower())
        if not self._search_matches:
            self.notify(f"No matches for '{query}'", severity="warning", timeout=2)
            return
        self.notify(
            f"Found {len(self._search_matches)} match(es) for '{query}'",
            severity="information",
            timeout=2,
        )
        self._goto_match(0)

    def _collect_matches(self, node: TreeNode, query: str) -> None:
        """Recursively collect nodes whose pod name contains the query."""
        pod = node.data
        if isinstance(pod, Pod) and query in pod.name.lower():
            self._search_matches.append(node)
        for child in node.children:
            self._collect_matches(child, query)

    def _goto_match(self, index: int) -> None:
        if not self._search_matches:
            return
        self._search_index = index % len(self._search_matches)
        match_node = self._search_matches[self._search_index]

        parent = match_node.parent
        while parent is not None:
            parent.expand()
            parent = parent.parent

        tree = self.query_one("#dep_tree", Tree)
        tree.select_node(match_node)
        tree.scroll_to_node(match_node)

    def action_next_match(self) -> None:
        if not self._search_matches:
            self.notify("No active search. Press / to search.", severity="information", timeout=2)
            return
        self._goto_match(self._search_index + 1)

    def action_prev_match(self) -> None:
        if not self._search_matches:
            self.notify("No active search. Press / to search.", severity="information", timeout=2)
            return
        self._goto_match(self._search_index - 1)

    def action_toggle_details(self) -> None:
        self._details_visible = not self._details_visible
        details = self.query_one("#details", Static)
        details.styles.display = "block" if self._details_visible else "none"

    def action_quit(self) -> None:
        self.exit()


def main() -> None:
    """Entry point for the podgraph TUI."""
    if len(sys.argv) < 2:
        print("Usage: python -m podgraph.tui.app PODFILE_LOCK", file=sys.stderr)
        sys.exit(1)
    app = PodTreeApp(lock_path=Path(sys.argv[1].strip()))
    app.run()


if __name__ == "__main__":
    main()
