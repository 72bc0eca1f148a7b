"""Command-line front door for attrtree.

Parses CLI options, resolves the target directory, and dispatches to the
tree, listing, detail, and attribute-editing commands. Domain errors are
reported as one-line messages through ``SystemExit``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .attributes import AttributeEdit, AttributeFlags, FileAttributeStore
from .config import Settings, load_settings, normalize_log_level
from .errors import AttrTreeError
from .file_tree_model import build_directory_tree_snapshot
from .render import (
    format_apply_result,
    format_file_details,
    format_file_row,
    format_tree_lines,
    skipped_warning,
)
from .ui_theme import UITheme, theme_for

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "attrtree"
FLAG_OPTIONS = ("read_only", "hidden", "archive", "system")

logger = logging.getLogger(__name__)


def _log_level(value: str) -> str:
    """argparse type for stdlib logging level names."""
    level = normalize_log_level(value)
    if level is None:
        raise argparse.ArgumentTypeError(f"unknown log level: {value!r}")
    return level


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with tree, ls, info, and set subcommands."""
    parser = argparse.ArgumentParser(
        prog="attrtree",
        description="Browse a directory tree and edit read-only/hidden/archive/system file attributes.",
    )
    parser.add_argument("--log-level", type=_log_level, default=None, help="Logging level (default from config, else WARNING).")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    commands = parser.add_subparsers(dest="command", required=True)

    tree_parser = commands.add_parser("tree", help="Print the subdirectory tree of a directory.")
    tree_parser.add_argument("path", nargs="?", default=None, help="Root directory. Defaults to current directory.")
    tree_parser.add_argument(
        "--follow-symlinks",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Descend into symlinked directories (default from config, else on).",
    )

    ls_parser = commands.add_parser("ls", help="List files of a directory with their attribute flags.")
    ls_parser.add_argument("path", nargs="?", default=None, help="Directory. Defaults to current directory.")

    info_parser = commands.add_parser("info", help="Show size, timestamps, and attributes of one file.")
    info_parser.add_argument("file", help="File to describe.")

    set_parser = commands.add_parser("set", help="Set or clear attribute flags on files in a directory.")
    set_parser.add_argument("directory", help="Directory containing the files.")
    set_parser.add_argument("names", nargs="+", metavar="NAME", help="File names inside DIRECTORY.")
    for option in FLAG_OPTIONS:
        set_parser.add_argument(
            f"--{option.replace('_', '-')}",
            dest=option,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Set (or with --no-{option.replace('_', '-')}, clear) the {option.replace('_', '-')} flag.",
        )
    return parser


def configure_logging(level: str) -> None:
    """Send log records to stderr and set the package logger level."""
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def _resolve_directory(raw: str | None, settings: Settings, default_path: Path | None) -> Path:
    if raw is not None:
        return Path(raw)
    if default_path is not None:
        return default_path
    if settings.default_root is not None:
        return settings.default_root
    return Path.cwd()


def _run_tree(args: argparse.Namespace, settings: Settings, theme: UITheme, default_path: Path | None) -> int:
    root = _resolve_directory(args.path, settings, default_path)
    follow_symlinks = settings.follow_symlinks if args.follow_symlinks is None else args.follow_symlinks
    snapshot = build_directory_tree_snapshot(root, follow_symlinks=follow_symlinks)
    for line in format_tree_lines(snapshot.root, snapshot.skipped, theme):
        print(line)
    for item in snapshot.skipped:
        print(skipped_warning(item), file=sys.stderr)
    return 0


def _run_ls(args: argparse.Namespace, settings: Settings, theme: UITheme, default_path: Path | None) -> int:
    directory = _resolve_directory(args.path, settings, default_path)
    for entry in FileAttributeStore().list_files(directory):
        print(format_file_row(entry, theme))
    return 0


def _run_info(args: argparse.Namespace, theme: UITheme) -> int:
    details = FileAttributeStore().describe(Path(args.file))
    for line in format_file_details(details, theme):
        print(line)
    return 0


def _run_set(args: argparse.Namespace, theme: UITheme) -> int:
    changes = {option: getattr(args, option) for option in FLAG_OPTIONS}
    if all(value is None for value in changes.values()):
        raise SystemExit("Nothing to change: pass at least one of --read-only, --hidden, --archive, --system.")

    directory = Path(args.directory)
    store = FileAttributeStore()
    current = {entry.name: entry.flags for entry in store.list_files(directory)}
    edits = [
        AttributeEdit(name=name, flags=current.get(name, AttributeFlags()).replace(**changes))
        for name in args.names
    ]
    results = store.apply(directory, edits)
    for result in results:
        print(format_apply_result(result, theme))

    confirmed = {entry.name: entry for entry in store.list_files(directory)}
    for result in results:
        if result.ok and result.name in confirmed:
            print(format_file_row(confirmed[result.name], theme))

    failures = sum(1 for result in results if not result.ok)
    if failures:
        logger.info("%d of %d attribute edits failed", failures, len(results))
        return 1
    return 0


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and run one attrtree command.

    ``default_path`` is primarily for tests; when omitted the configured
    ``default_root`` or the current working directory is used.
    """
    parser = build_parser()
    args = parser.parse_args()
    settings = load_settings()
    configure_logging(args.log_level or settings.log_level)
    theme = theme_for(settings.color and not args.no_color and sys.stdout.isatty())

    try:
        if args.command == "tree":
            status = _run_tree(args, settings, theme, default_path)
        elif args.command == "ls":
            status = _run_ls(args, settings, theme, default_path)
        elif args.command == "info":
            status = _run_info(args, theme)
        else:
            status = _run_set(args, theme)
    except AttrTreeError as exc:
        raise SystemExit(str(exc)) from exc

    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
