"""Filesystem scanning and directory-tree construction."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import DirectoryUnavailable, NotFound, describe_os_error
from .types import DirectoryNode, SkippedDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryTreeSnapshot:
    """Built tree plus every directory that was not descended."""

    root_path: Path
    root: DirectoryNode
    skipped: tuple[SkippedDirectory, ...] = ()


@dataclass
class _PendingNode:
    name: str
    full_path: Path
    canonical: Path
    parent: int | None
    children: list[int] = field(default_factory=list)


def name_sort_key(name: str) -> tuple[str, str]:
    """Case-insensitive ordering with a case-sensitive tiebreak."""
    return name.casefold(), name


def _canonical(path: Path) -> Path:
    """Return the real path of ``path``, or ``path`` itself when unresolvable."""
    try:
        return path.resolve()
    except (OSError, RuntimeError):
        return path


def list_subdirectories(directory: Path, follow_symlinks: bool = True) -> list[tuple[str, Path]]:
    """Return ``(name, path)`` for each immediate subdirectory, sorted by name.

    Raises ``OSError`` when ``directory`` itself cannot be scanned.
    """
    children: list[tuple[str, Path]] = []
    with os.scandir(directory) as entries:
        for child in entries:
            try:
                is_dir = child.is_dir(follow_symlinks=follow_symlinks)
            except OSError:
                is_dir = False
            if is_dir:
                children.append((child.name, directory / child.name))
    children.sort(key=lambda item: name_sort_key(item[0]))
    return children


def _resolve_root(root: Path | str) -> Path:
    root_path = Path(root)
    if not root_path.exists():
        raise NotFound(root_path)
    if not root_path.is_dir():
        raise DirectoryUnavailable(root_path, "not a directory")
    return root_path.resolve()


def _links_back_to_ancestor(arena: list[_PendingNode], parent_index: int | None, canonical: Path) -> bool:
    index = parent_index
    while index is not None:
        pending = arena[index]
        if pending.canonical == canonical:
            return True
        index = pending.parent
    return False


def _freeze_one(pending: _PendingNode, built: dict[int, DirectoryNode]) -> DirectoryNode:
    return DirectoryNode(
        name=pending.name,
        full_path=pending.full_path,
        children=tuple(built[child] for child in pending.children),
    )


def _freeze(arena: list[_PendingNode]) -> DirectoryNode:
    # Children are always appended after their parent, so a reverse sweep
    # sees every child before the node that owns it.
    built: dict[int, DirectoryNode] = {}
    for index in range(len(arena) - 1, 0, -1):
        built[index] = _freeze_one(arena[index], built)
    return _freeze_one(arena[0], built)


def build_directory_tree_snapshot(root: Path | str, follow_symlinks: bool = True) -> DirectoryTreeSnapshot:
    """Build the subdirectory tree under ``root`` without recursion.

    Raises ``NotFound`` when ``root`` is missing and ``DirectoryUnavailable``
    when it is not a directory. Subdirectories that cannot be scanned, or
    that link back to one of their ancestors, stay in the tree as leaves and
    are listed in ``skipped``.
    """
    root_path = _resolve_root(root)
    arena = [
        _PendingNode(
            name=root_path.name or str(root_path),
            full_path=root_path,
            canonical=root_path,
            parent=None,
        )
    ]
    skipped: list[SkippedDirectory] = []
    stack = [0]

    while stack:
        index = stack.pop()
        pending = arena[index]
        try:
            subdirectories = list_subdirectories(pending.full_path, follow_symlinks)
        except OSError as exc:
            reason = describe_os_error(exc)
            logger.warning("Skipping unreadable directory %s: %s", pending.full_path, reason)
            skipped.append(SkippedDirectory(path=pending.full_path, reason=reason))
            continue

        descend: list[int] = []
        for name, child_path in subdirectories:
            canonical = _canonical(child_path)
            child_index = len(arena)
            arena.append(_PendingNode(name=name, full_path=child_path, canonical=canonical, parent=index))
            pending.children.append(child_index)
            if _links_back_to_ancestor(arena, index, canonical):
                logger.warning("Not descending into %s: links back to %s", child_path, canonical)
                skipped.append(SkippedDirectory(path=child_path, reason=f"symlink cycle to {canonical}"))
                continue
            descend.append(child_index)
        stack.extend(reversed(descend))

    return DirectoryTreeSnapshot(root_path=root_path, root=_freeze(arena), skipped=tuple(skipped))


def build_directory_tree(root: Path | str, follow_symlinks: bool = True) -> DirectoryNode:
    """Build and return only the root ``DirectoryNode`` for ``root``."""
    return build_directory_tree_snapshot(root, follow_symlinks=follow_symlinks).root


__all__ = [
    "DirectoryTreeSnapshot",
    "name_sort_key",
    "list_subdirectories",
    "build_directory_tree_snapshot",
    "build_directory_tree",
]
