"""File attribute bits and the managed-flag subset.

Bit values follow the Windows/SMB ``FILE_ATTRIBUTE_*`` numbering so a
bitmask read on any platform means the same thing.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class FileAttribute(enum.IntFlag):
    READONLY = 0x00000001
    HIDDEN = 0x00000002
    SYSTEM = 0x00000004
    DIRECTORY = 0x00000010
    ARCHIVE = 0x00000020
    NORMAL = 0x00000080  # only meaningful when no other bit is set
    TEMPORARY = 0x00000100
    SPARSE_FILE = 0x00000200
    REPARSE_POINT = 0x00000400
    COMPRESSED = 0x00000800
    OFFLINE = 0x00001000
    NOT_CONTENT_INDEXED = 0x00002000
    ENCRYPTED = 0x00004000


MANAGED_ATTRIBUTES = (
    FileAttribute.READONLY | FileAttribute.HIDDEN | FileAttribute.ARCHIVE | FileAttribute.SYSTEM
)


@dataclass(frozen=True)
class AttributeFlags:
    """Desired or observed state of the four managed attribute bits."""

    read_only: bool = False
    hidden: bool = False
    archive: bool = False
    system: bool = False

    @classmethod
    def from_bits(cls, bits: int) -> "AttributeFlags":
        """Pick the four managed flags out of a raw bitmask."""
        return cls(
            read_only=bool(bits & FileAttribute.READONLY),
            hidden=bool(bits & FileAttribute.HIDDEN),
            archive=bool(bits & FileAttribute.ARCHIVE),
            system=bool(bits & FileAttribute.SYSTEM),
        )

    def to_bits(self) -> int:
        """Return only the managed bits these flags set."""
        bits = 0
        if self.read_only:
            bits |= FileAttribute.READONLY
        if self.hidden:
            bits |= FileAttribute.HIDDEN
        if self.archive:
            bits |= FileAttribute.ARCHIVE
        if self.system:
            bits |= FileAttribute.SYSTEM
        return int(bits)

    def merge_into(self, current: int) -> int:
        """Return ``current`` with the managed bits replaced by these flags.

        Every bit outside ``MANAGED_ATTRIBUTES`` is carried over unchanged.
        """
        return (int(current) & ~int(MANAGED_ATTRIBUTES)) | self.to_bits()

    def replace(self, **changes: bool | None) -> "AttributeFlags":
        """Return a copy with the non-``None`` flags in ``changes`` applied."""
        values = {
            "read_only": self.read_only,
            "hidden": self.hidden,
            "archive": self.archive,
            "system": self.system,
        }
        for key, value in changes.items():
            if key not in values:
                raise TypeError(f"unknown attribute flag: {key}")
            if value is not None:
                values[key] = bool(value)
        return AttributeFlags(**values)

    def letters(self) -> str:
        """Compact ``RHAS`` column with ``-`` for cleared flags."""
        return "".join(
            letter if flag else "-"
            for letter, flag in (
                ("R", self.read_only),
                ("H", self.hidden),
                ("A", self.archive),
                ("S", self.system),
            )
        )


def describe_attributes(bits: int) -> str:
    """Comma-separated attribute names for ``bits`` (``Normal`` when empty)."""
    names = [
        member.name.replace("_", " ").title().replace(" ", "")
        for member in FileAttribute
        if member is not FileAttribute.NORMAL and bits & member
    ]
    return ", ".join(names) if names else "Normal"


__all__ = [
    "FileAttribute",
    "MANAGED_ATTRIBUTES",
    "AttributeFlags",
    "describe_attributes",
]
