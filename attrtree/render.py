"""Text rendering for trees, file rows, apply results, and file details."""

from __future__ import annotations

from datetime import datetime

from .attributes import ApplyResult, AttributeFlags, FileDetails, FileEntry, describe_attributes
from .file_tree_model import DirectoryNode, SkippedDirectory
from .ui_theme import DEFAULT_THEME, UITheme

DETAIL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_tree_lines(
    root: DirectoryNode,
    skipped: tuple[SkippedDirectory, ...] = (),
    theme: UITheme | None = None,
) -> list[str]:
    """Render ``root`` and its subtree as indented rows, one per directory."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    skipped_paths = {item.path for item in skipped}
    lines: list[str] = []
    stack: list[tuple[DirectoryNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        indent = "  " * depth
        marker = "▾ " if node.children else "▸ "
        name = node.name if node.name.endswith(("/", "\\")) else f"{node.name}/"
        row = f"{indent}{active_theme.tree_marker}{marker}{reset}{active_theme.tree_dir}{name}{reset}"
        if node.full_path in skipped_paths:
            row += f" {active_theme.tree_skipped}(skipped){reset}"
        lines.append(row)
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return lines


def format_flags(flags: AttributeFlags, theme: UITheme | None = None) -> str:
    """Render the ``RHAS`` column with set and cleared flags colored apart."""
    active_theme = theme or DEFAULT_THEME
    out: list[str] = []
    for letter in flags.letters():
        color = active_theme.flag_clear if letter == "-" else active_theme.flag_set
        out.append(f"{color}{letter}{active_theme.reset}")
    return "".join(out)


def format_file_row(entry: FileEntry, theme: UITheme | None = None) -> str:
    """Render one listed file as its flag column followed by its name."""
    active_theme = theme or DEFAULT_THEME
    return f"{format_flags(entry.flags, active_theme)}  {active_theme.file_name}{entry.name}{active_theme.reset}"


def format_apply_result(result: ApplyResult, theme: UITheme | None = None) -> str:
    """Render one batch-apply outcome as ``ok`` or ``failed`` plus the error."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    if result.ok:
        return f"{active_theme.status_ok}ok{reset}     {result.name}"
    return f"{active_theme.status_error}failed{reset} {result.name}: {result.error}"


def skipped_warning(item: SkippedDirectory) -> str:
    """One-line stderr warning for a directory left out of the tree."""
    return f"warning: skipped {item.path}: {item.reason}"


def _format_time(value: datetime | None) -> str:
    return value.strftime(DETAIL_TIME_FORMAT) if value is not None else "unknown"


def format_file_details(details: FileDetails, theme: UITheme | None = None) -> list[str]:
    """Render the detail block shown for one selected file."""
    active_theme = theme or DEFAULT_THEME
    label = active_theme.detail_label
    reset = active_theme.reset
    rows = [
        ("Name", details.name),
        ("Created", _format_time(details.created)),
        ("Modified", _format_time(details.modified)),
        ("Size", f"{details.size} bytes"),
        ("Attributes", describe_attributes(details.attributes)),
        ("Flags", format_flags(details.flags, active_theme)),
    ]
    return [f"{label}{key}:{reset} {value}" for key, value in rows]


__all__ = [
    "format_tree_lines",
    "format_flags",
    "format_file_row",
    "format_apply_result",
    "format_file_details",
    "skipped_warning",
]
