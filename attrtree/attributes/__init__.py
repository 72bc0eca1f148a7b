"""File attribute model: managed flags, platform backends, and the store.

Lists immediate files with their read-only/hidden/archive/system flags.
Applies edited flags back one file or a batch at a time, preserving every
unmanaged bit.
"""

from __future__ import annotations

from .flags import MANAGED_ATTRIBUTES, AttributeFlags, FileAttribute, describe_attributes
from .backends import (
    DOSATTRIB_XATTR,
    AttributeBackend,
    PosixAttributeBackend,
    WindowsAttributeBackend,
    default_backend,
    format_dosattrib,
    parse_dosattrib,
)
from .store import ApplyResult, AttributeEdit, FileAttributeStore, FileDetails, FileEntry

__all__ = [
    "FileAttribute",
    "MANAGED_ATTRIBUTES",
    "AttributeFlags",
    "describe_attributes",
    "AttributeBackend",
    "DOSATTRIB_XATTR",
    "WindowsAttributeBackend",
    "PosixAttributeBackend",
    "default_backend",
    "parse_dosattrib",
    "format_dosattrib",
    "FileEntry",
    "AttributeEdit",
    "ApplyResult",
    "FileDetails",
    "FileAttributeStore",
]
