"""ANSI palettes used by the text renderers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    tree_marker: str
    tree_dir: str
    tree_skipped: str
    file_name: str
    flag_set: str
    flag_clear: str
    status_ok: str
    status_error: str
    detail_label: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_skipped="\033[2;38;5;250m",
    file_name="\033[38;5;252m",
    flag_set="\033[1;38;5;229m",
    flag_clear="\033[2m",
    status_ok="\033[38;5;42m",
    status_error="\033[38;5;203m",
    detail_label="\033[1;38;5;81m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    tree_marker="",
    tree_dir="",
    tree_skipped="",
    file_name="",
    flag_set="",
    flag_clear="",
    status_ok="",
    status_error="",
    detail_label="",
)


def theme_for(color: bool) -> UITheme:
    """Return the ANSI palette when ``color`` is on, else the plain one."""
    return DEFAULT_THEME if color else PLAIN_THEME


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "theme_for",
]
