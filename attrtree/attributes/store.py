"""Directory file listing and batch attribute application."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import NamedTuple

from ..errors import (
    AttrTreeError,
    AttributeWriteFailed,
    DirectoryUnavailable,
    FileMissing,
    describe_os_error,
)
from ..file_tree_model import name_sort_key
from .backends import AttributeBackend, default_backend
from .flags import AttributeFlags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """One listed file and its managed flags as last read from disk."""

    name: str
    read_only: bool = False
    hidden: bool = False
    archive: bool = False
    system: bool = False
    attributes: int = 0

    @classmethod
    def from_bits(cls, name: str, bits: int) -> "FileEntry":
        flags = AttributeFlags.from_bits(bits)
        return cls(
            name=name,
            read_only=flags.read_only,
            hidden=flags.hidden,
            archive=flags.archive,
            system=flags.system,
            attributes=int(bits),
        )

    @property
    def flags(self) -> AttributeFlags:
        return AttributeFlags(
            read_only=self.read_only,
            hidden=self.hidden,
            archive=self.archive,
            system=self.system,
        )


class AttributeEdit(NamedTuple):
    name: str
    flags: AttributeFlags


@dataclass(frozen=True)
class ApplyResult:
    """Outcome for one file of a batch apply; ``error`` is ``None`` on success."""

    name: str
    error: AttrTreeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FileDetails:
    """Size, timestamps, and raw attributes of one file, as shown in its detail view."""

    name: str
    path: Path
    size: int
    created: datetime | None
    modified: datetime
    attributes: int

    @property
    def flags(self) -> AttributeFlags:
        return AttributeFlags.from_bits(self.attributes)


def _creation_time(st: os.stat_result) -> datetime | None:
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return datetime.fromtimestamp(birthtime)
    if os.name == "nt":
        return datetime.fromtimestamp(st.st_ctime)
    return None


def _is_plain_name(name: str) -> bool:
    if not name or name in {".", ".."}:
        return False
    separators = {"/", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    return not any(sep in name for sep in separators)


class FileAttributeStore:
    """Reads and writes the managed attribute flags of files in a directory.

    Every call goes to disk; nothing is cached between calls, so callers
    re-list after ``apply`` to see the confirmed state.
    """

    def __init__(self, backend: AttributeBackend | None = None) -> None:
        self.backend = backend if backend is not None else default_backend()

    def list_files(self, directory: Path | str) -> list[FileEntry]:
        """Return immediate files of ``directory`` with their flags, sorted by name.

        Raises ``DirectoryUnavailable`` when the directory cannot be scanned or
        any file's attributes cannot be read; no partial listing is returned.
        """
        directory = Path(directory)
        try:
            names: list[str] = []
            with os.scandir(directory) as entries:
                for child in entries:
                    if child.is_file():
                        names.append(child.name)
            names.sort(key=name_sort_key)
            return [FileEntry.from_bits(name, self.backend.read(directory / name)) for name in names]
        except OSError as exc:
            raise DirectoryUnavailable(directory, describe_os_error(exc)) from exc

    def apply_one(self, directory: Path | str, name: str, flags: AttributeFlags) -> None:
        """Set the managed flags of ``directory / name``, raising on failure."""
        directory = Path(directory)
        if not _is_plain_name(name):
            raise FileMissing(directory / name, "not a file name in this directory")
        path = directory / name
        if not path.is_file():
            raise FileMissing(path)

        try:
            current = self.backend.read(path)
        except FileNotFoundError as exc:
            raise FileMissing(path) from exc
        except OSError as exc:
            raise AttributeWriteFailed(path, describe_os_error(exc)) from exc

        desired = flags.merge_into(current)
        try:
            self.backend.write(path, desired)
        except FileNotFoundError as exc:
            raise FileMissing(path) from exc
        except OSError as exc:
            raise AttributeWriteFailed(path, describe_os_error(exc)) from exc
        logger.debug("Set attributes of %s to %#x (was %#x)", path, desired, current)

    def apply(
        self,
        directory: Path | str,
        edits: Iterable[AttributeEdit | tuple[str, AttributeFlags]],
    ) -> list[ApplyResult]:
        """Apply each edit independently and return one result per edit, in order."""
        results: list[ApplyResult] = []
        for name, flags in edits:
            try:
                self.apply_one(directory, name, flags)
            except AttrTreeError as exc:
                logger.warning("%s", exc)
                results.append(ApplyResult(name=name, error=exc))
            else:
                results.append(ApplyResult(name=name))
        return results

    def describe(self, path: Path | str) -> FileDetails:
        """Return size, timestamps and attributes of one file."""
        path = Path(path)
        if not path.is_file():
            raise FileMissing(path)
        try:
            st = path.stat()
            bits = self.backend.read(path)
        except FileNotFoundError as exc:
            raise FileMissing(path) from exc
        except OSError as exc:
            raise DirectoryUnavailable(path.parent, describe_os_error(exc)) from exc
        return FileDetails(
            name=path.name,
            path=path,
            size=int(st.st_size),
            created=_creation_time(st),
            modified=datetime.fromtimestamp(st.st_mtime),
            attributes=bits,
        )


__all__ = [
    "FileEntry",
    "AttributeEdit",
    "ApplyResult",
    "FileDetails",
    "FileAttributeStore",
]
