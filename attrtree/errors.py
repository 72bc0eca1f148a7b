"""Error taxonomy for tree building, listing, and attribute writes.

Every error carries the offending ``path`` and an optional ``reason``.
OS-level causes are chained with ``raise ... from``.
"""

from __future__ import annotations

from pathlib import Path


class AttrTreeError(Exception):
    """Base class for user-visible attrtree failures."""

    summary = "attrtree error"

    def __init__(self, path: Path | str, reason: str | None = None) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(self.message())

    def message(self) -> str:
        if self.reason:
            return f"{self.summary}: {self.path} ({self.reason})"
        return f"{self.summary}: {self.path}"


class NotFound(AttrTreeError):
    """Root path given to the tree builder does not exist."""

    summary = "Path not found"


class DirectoryUnavailable(AttrTreeError):
    """Directory could not be enumerated (missing, not a directory, permissions, I/O)."""

    summary = "Directory unavailable"


class FileMissing(AttrTreeError):
    """Target file vanished (or never existed) before an attribute write."""

    summary = "File missing"


class AttributeWriteFailed(AttrTreeError):
    """OS rejected an attribute bitmask write."""

    summary = "Attribute write failed"


def describe_os_error(exc: OSError) -> str:
    """Short reason text for an ``OSError`` without repeating the filename."""
    return exc.strerror or exc.__class__.__name__


__all__ = [
    "AttrTreeError",
    "NotFound",
    "DirectoryUnavailable",
    "FileMissing",
    "AttributeWriteFailed",
    "describe_os_error",
]
