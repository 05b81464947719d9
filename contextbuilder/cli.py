"""Command-line front door for the context builder.

Loads a directory through the configured content provider, applies the
search/extension filters and selections given on the command line, then
prints the selectable tree or the finished bundle. ``--serve`` runs the
web API instead.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .bundle import LocalContentProvider, get_content_provider
from .config import ROOT_ENV_VAR, default_root, load_default_extensions, load_style_name
from .file_types import FILE_TYPE_PRESETS, extensions_for_preset
from .highlight import colorize_bundle
from .recent_paths import clear_recent_paths, load_recent_paths
from .server import DEFAULT_HOST, DEFAULT_PORT, serve
from .session import Session, clean_pasted_path
from .tree_view import render_tree_rows


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _preset_name(value: str) -> str:
    lowered = value.strip().lower()
    if lowered not in FILE_TYPE_PRESETS:
        raise argparse.ArgumentTypeError(f"unknown preset {value!r} (choose from {', '.join(FILE_TYPE_PRESETS)})")
    return lowered


def normalize_selection(raw: str) -> str:
    """Turn a command-line path into the tree's forward-slash relative form."""
    path = raw.replace("\\", "/").strip()
    while path.startswith("./"):
        path = path[2:]
    return path.rstrip("/") or path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Select files from a project and bundle them into one LLM-ready text document."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help=f"Project directory. Defaults to ${ROOT_ENV_VAR}, then the current directory.",
    )
    parser.add_argument(
        "-s",
        "--select",
        action="append",
        default=[],
        metavar="PATH",
        help="Relative file or directory to select (repeatable).",
    )
    parser.add_argument("--all", action="store_true", help="Select every visible path.")
    parser.add_argument("-q", "--query", default="", help="Only show names containing this text.")
    parser.add_argument(
        "-e",
        "--ext",
        action="append",
        default=[],
        metavar="EXT",
        help="Only show files with this extension (repeatable).",
    )
    parser.add_argument(
        "--preset",
        action="append",
        default=[],
        type=_preset_name,
        help=f"Add a file-type preset to the extension filter ({', '.join(FILE_TYPE_PRESETS)}).",
    )
    parser.add_argument("--tree", action="store_true", help="Print the selectable tree instead of a bundle.")
    parser.add_argument("--no-map", action="store_true", help="Omit the <file_map> block from the bundle.")
    parser.add_argument("-o", "--output", metavar="FILE", help="Write the bundle to FILE.")
    parser.add_argument("--remote", metavar="URL", help="Use a context-builder server instead of the local filesystem.")
    parser.add_argument("--show-hidden", action="store_true", help="Include dotfiles and dot-directories.")
    parser.add_argument("--serve", action="store_true", help="Run the web API server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Host for --serve.")
    parser.add_argument("--port", type=_positive_int, default=DEFAULT_PORT, help="Port for --serve.")
    parser.add_argument("--style", default=None, help="Pygments style name for highlighted output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--recent", action="store_true", help="List recently used directories and exit.")
    parser.add_argument("--clear-recent", action="store_true", help="Forget recently used directories and exit.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity.")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _print_recent() -> None:
    entries = load_recent_paths()
    if not entries:
        print("No recent directories.")
        return
    for entry in entries:
        print(f"{entry.name}\t{entry.path}")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print a tree or bundle for the chosen directory."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.clear_recent:
        clear_recent_paths()
        return
    if args.recent:
        _print_recent()
        return
    if args.serve:
        serve(args.host, args.port, LocalContentProvider(show_hidden=args.show_hidden))
        return

    raw_path = args.path or default_root() or str(Path.cwd())
    dir_path = clean_pasted_path(raw_path)

    extensions: set[str] = {ext.lower().lstrip(".") for ext in args.ext if ext.strip()}
    for preset in args.preset:
        extensions.update(extensions_for_preset(preset))
    if not extensions:
        extensions = set(load_default_extensions())

    session = Session(get_content_provider(args.remote, show_hidden=args.show_hidden))
    session.set_search(args.query)
    session.set_extensions(extensions)
    engine = session.load_directory(dir_path)
    if engine is None:
        raise SystemExit(session.error or "Unable to read directory")

    if args.all:
        session.select_all()
    for raw in args.select:
        rel_path = normalize_selection(raw)
        if rel_path in engine.selected:
            continue
        if not session.toggle(rel_path):
            print(f"Not in tree: {raw}", file=sys.stderr)

    if args.tree or not engine.selected:
        for row in render_tree_rows(engine, search_query=args.query, expand_everything=True, show_presets=True):
            print(row)
        stats = session.stats()
        print(f"\n{stats.files} files (+ {stats.folders} folders) selected")
        return

    bundle = session.build_bundle(include_file_map=not args.no_map)
    if bundle is None:
        raise SystemExit(session.error or "Failed to copy files. Please try again.")

    if args.output:
        Path(args.output).write_text(bundle + "\n", encoding="utf-8")
        stats = session.stats()
        print(f"Wrote {stats.files} files to {args.output}", file=sys.stderr)
        return

    if sys.stdout.isatty() and not args.no_color:
        style = args.style or load_style_name()
        sys.stdout.write(colorize_bundle(bundle, style) + "\n")
        return
    sys.stdout.write(bundle + "\n")


if __name__ == "__main__":
    main()
