"""Domain model for directory trees.

This package contains non-UI tree primitives:
- immutable directory nodes with nested subdirectories
- iterative subdirectory scanning with a symlink-cycle guard
- snapshots that record which directories were skipped and why
"""

from __future__ import annotations

from .types import DirectoryNode, SkippedDirectory
from .fs import (
    DirectoryTreeSnapshot,
    build_directory_tree,
    build_directory_tree_snapshot,
    list_subdirectories,
    name_sort_key,
)

__all__ = [
    "DirectoryNode",
    "SkippedDirectory",
    "DirectoryTreeSnapshot",
    "build_directory_tree",
    "build_directory_tree_snapshot",
    "list_subdirectories",
    "name_sort_key",
]
