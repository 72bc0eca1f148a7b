"""Domain datatypes for the directory tree."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DirectoryNode:
    """Directory entry with recursively nested subdirectories."""

    name: str
    full_path: Path
    children: tuple["DirectoryNode", ...] = ()

    def iter_nodes(self) -> Iterator["DirectoryNode"]:
        """Yield this node and all descendants in depth-first pre-order."""
        stack: list[DirectoryNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count(self) -> int:
        """Return the number of nodes in this subtree, root included."""
        return sum(1 for _node in self.iter_nodes())

    def find(self, path: Path) -> "DirectoryNode | None":
        """Return the node whose ``full_path`` equals ``path``."""
        for node in self.iter_nodes():
            if node.full_path == path:
                return node
        return None


@dataclass(frozen=True)
class SkippedDirectory:
    """Subdirectory kept in the tree without children, and why."""

    path: Path
    reason: str


__all__ = [
    "DirectoryNode",
    "SkippedDirectory",
]
