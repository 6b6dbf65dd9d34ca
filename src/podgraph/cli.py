"""Command-line interface for podgraph: Podfile.lock to Graphviz DOT."""

from __future__ import annotations

import argparse
import json
import shutil
import subprocess
import sys
from pathlib import Path

from podgraph.api import format_summary, pods_to_dict
from podgraph.core.emitter import generate_dot
from podgraph.core.errors import PodGraphError
from podgraph.core.parser import check_integrity, parse_lock_file
from podgraph.core.resolver import resolve_versions


def _check_graphviz() -> bool:
    """Check if Graphviz (dot) is available."""
    return shutil.which("dot") is not None


def _render_dot(dot_content: str, output_path: Path, format: str) -> bool:
    """Render DOT content to an image file using Graphviz."""
    if not _check_graphviz():
        print(
            "Error: Graphviz not found. Install it with:\n"
            "  Ubuntu/Debian: sudo apt install graphviz\n"
            "  macOS: brew install graphviz\n"
            "  Or download from: https://graphviz.org/download/",
            file=sys.stderr,
        )
        return False

    try:
        result = subprocess.run(
            ["dot", f"-T{format}", "-o", str(output_path)],
            input=dot_content,
            capture_output=True,
            text=True,
            timeout=60,
        )
    except subprocess.TimeoutExpired:
        print("Error: Graphviz timed out (graph may be too large)", file=sys.stderr)
        return False
    except OSError as e:
        print(f"Error running Graphviz: {e}", file=sys.stderr)
        return False
    if result.returncode != 0:
        print(f"Graphviz error: {result.stderr}", file=sys.stderr)
        return False
    return True


def _open_file(path: Path) -> bool:
    """Open a file with the system default application."""
    import platform

    system = platform.system()
    try:
        if system == "Darwin":  # macOS
            subprocess.run(["open", str(path)], check=True)
        elif system == "Windows":
            subprocess.run(["start", "", str(path)], shell=True, check=True)
        else:  # Linux and others
            subprocess.run(["xdg-open", str(path)], check=True)
        return True
    except (OSError, subprocess.CalledProcessError) as e:
        print(f"Could not open file: {e}", file=sys.stderr)
        return False


def cmd_tui(args: argparse.Namespace) -> int:
    """Launch the interactive TUI."""
    from podgraph.tui.app import PodTreeApp

    app = PodTreeApp(lock_path=Path(args.lockfile), check=not args.no_check)
    app.run()
    return 0


def cmd_graph(args: argparse.Namespace) -> int:
    """Parse the lock file and print or render its dependency graph."""
    lock_path = Path(args.lockfile)
    render_format = getattr(args, "render", None)
    if render_format and args.format != "dot":
        print(
            f"Error: --render only works with DOT format (not {args.format}).",
            file=sys.stderr,
        )
        return 1

    try:
        result = parse_lock_file(lock_path)
        if args.verbose:
            print(
                f"Parsed {len(result.pods)} pod(s), {result.dependency_count} "
                f"dependency edge(s) from {lock_path}",
                file=sys.stderr,
            )
        if not args.no_check:
            check_integrity(result)
        resolve_versions(result.pods)
    except FileNotFoundError:
        print(f"Error: file not found: {lock_path}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot read {lock_path}: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: {lock_path} is not valid UTF-8: {e}", file=sys.stderr)
        return 1
    except PodGraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    pods = result.pods
    if args.format == "json":
        output = json.dumps(pods_to_dict(pods), indent=2) + "\n"
    elif args.format == "text":
        output = format_summary(pods) + "\n"
    else:
        output = generate_dot(pods, color=not args.no_color)

    if render_format:
        if args.output:
            out_path = Path(args.output)
            if out_path.suffix.lower() != f".{render_format}":
                out_path = out_path.with_suffix(f".{render_format}")
        else:
            out_path = Path(f"{lock_path.stem}.{render_format}")

        print(f"Rendering graph to {out_path}...", file=sys.stderr)
        if not _render_dot(output, out_path, render_format):
            return 1
        print(f"Graph image saved to: {out_path}", file=sys.stderr)

        if getattr(args, "open", False):
            _open_file(out_path)
        return 0

    if args.output:
        try:
            Path(args.output).write_text(output)
        except OSError as e:
            print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
            return 1
        print(f"Graph written to: {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="podgraph",
        description=(
            "Generate a Graphviz DOT dependency graph from a CocoaPods Podfile.lock. "
            "Dependency constraints are replaced with the concrete versions "
            "locked in the file."
        ),
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument(
        "lockfile",
        nargs="?",
        help="Path to the Podfile.lock",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["dot", "json", "text"],
        default="dot",
        help="Output format: dot (Graphviz), json, or text summary (default: dot)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Don't colour pods with more than 2 dependencies",
    )
    parser.add_argument(
        "--no-check",
        action="store_true",
        help="Skip the check that every line in the PODS section was parsed",
    )
    parser.add_argument(
        "--render",
        choices=["png", "svg", "pdf"],
        metavar="FORMAT",
        help="Render to image (png, svg, pdf). Requires Graphviz installed.",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        help="Open the rendered image after creation (use with --render)",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Browse the dependency graph in the interactive terminal UI",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the podgraph CLI."""
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]

    # No arguments at all means help.
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    if args.lockfile is None:
        parser.print_help()
        return 0

    if args.tui:
        return cmd_tui(args)
    return cmd_graph(args)


if __name__ == "__main__":
    sys.exit(main())
