"""Platform adapters that read and write one path's raw attribute bitmask.

Windows goes straight to ``GetFileAttributesW``/``SetFileAttributesW``.
POSIX derives READONLY from the write permission bits and keeps the other
DOS bits in the ``user.DOSATTRIB`` extended attribute, using the legacy
``0x<hex>`` text form Samba also reads.
"""

from __future__ import annotations

import errno
import os
import stat
from pathlib import Path
from typing import Protocol

from .flags import FileAttribute

DOSATTRIB_XATTR = "user.DOSATTRIB"
INVALID_FILE_ATTRIBUTES = 0xFFFFFFFF

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH
_NO_XATTR_ERRNOS = frozenset(
    code
    for code in (
        getattr(errno, "ENODATA", None),
        getattr(errno, "ENOATTR", None),
        errno.ENOTSUP,
        errno.EOPNOTSUPP,
    )
    if code is not None
)
# user.* xattrs need read access; the DOS bits of an unreadable file read as clear.
_UNREADABLE_XATTR_ERRNOS = frozenset((errno.EACCES, errno.EPERM))


class AttributeBackend(Protocol):
    def read(self, path: Path) -> int:
        """Return the raw attribute bitmask of ``path``; raise ``OSError`` on failure."""
        ...

    def write(self, path: Path, bits: int) -> None:
        """Store ``bits`` as the attribute bitmask of ``path``; raise ``OSError`` on failure."""
        ...


class WindowsAttributeBackend:
    """Win32 attribute calls through ``ctypes``."""

    def __init__(self) -> None:
        import ctypes
        from ctypes import wintypes

        self._ctypes = ctypes
        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)

        self._get_attributes = kernel32.GetFileAttributesW
        self._get_attributes.argtypes = [wintypes.LPCWSTR]
        self._get_attributes.restype = wintypes.DWORD

        self._set_attributes = kernel32.SetFileAttributesW
        self._set_attributes.argtypes = [wintypes.LPCWSTR, wintypes.DWORD]
        self._set_attributes.restype = wintypes.BOOL

    def _last_error(self, path: Path) -> OSError:
        code = self._ctypes.get_last_error()
        return OSError(None, self._ctypes.FormatError(code).strip(), str(path), code)

    def read(self, path: Path) -> int:
        bits = self._get_attributes(str(path))
        if bits == INVALID_FILE_ATTRIBUTES:
            raise self._last_error(path)
        return int(bits)

    def write(self, path: Path, bits: int) -> None:
        value = int(bits) & ~int(FileAttribute.NORMAL)
        if value == 0:
            value = int(FileAttribute.NORMAL)
        if not self._set_attributes(str(path), value):
            raise self._last_error(path)


def parse_dosattrib(raw: bytes) -> int:
    """Decode the ASCII ``0x<hex>`` prefix of a ``user.DOSATTRIB`` value.

    Anything after the first NUL (Samba's binary blob) is ignored. Values that
    do not start with ``0x`` decode as no bits.
    """
    text = raw.split(b"\0", 1)[0].decode("ascii", errors="replace").strip()
    if not text.lower().startswith("0x"):
        return 0
    try:
        return int(text, 16)
    except ValueError:
        return 0


def format_dosattrib(bits: int) -> bytes:
    """Encode ``bits`` as the ASCII ``0x<hex>`` form Samba reads."""
    return f"0x{int(bits):x}".encode("ascii")


class PosixAttributeBackend:
    """Mode bits for READONLY, an extended attribute for everything else."""

    def __init__(self, xattr_name: str = DOSATTRIB_XATTR) -> None:
        self.xattr_name = xattr_name

    def _read_dos_bits(self, path: Path) -> int:
        getxattr = getattr(os, "getxattr", None)
        if getxattr is None:
            return 0
        try:
            raw = getxattr(path, self.xattr_name)
        except OSError as exc:
            if exc.errno in _NO_XATTR_ERRNOS or exc.errno in _UNREADABLE_XATTR_ERRNOS:
                return 0
            raise
        return parse_dosattrib(raw)

    def _write_dos_bits(self, path: Path, bits: int) -> None:
        setxattr = getattr(os, "setxattr", None)
        if setxattr is None:
            raise OSError(errno.ENOTSUP, "extended attributes are not supported", str(path))
        if bits == 0:
            try:
                os.removexattr(path, self.xattr_name)
            except OSError as exc:
                if exc.errno not in _NO_XATTR_ERRNOS:
                    raise
            return
        setxattr(path, self.xattr_name, format_dosattrib(bits))

    def read(self, path: Path) -> int:
        st = os.stat(path)
        bits = self._read_dos_bits(path) & ~int(FileAttribute.READONLY | FileAttribute.DIRECTORY)
        if not st.st_mode & _WRITE_BITS:
            bits |= FileAttribute.READONLY
        if stat.S_ISDIR(st.st_mode):
            bits |= FileAttribute.DIRECTORY
        return int(bits)

    def write(self, path: Path, bits: int) -> None:
        st = os.stat(path)
        mode = stat.S_IMODE(st.st_mode)
        if bits & FileAttribute.READONLY:
            new_mode = mode & ~_WRITE_BITS
        elif mode & _WRITE_BITS:
            new_mode = mode
        else:
            new_mode = mode | stat.S_IWUSR

        stored = int(bits) & ~int(FileAttribute.READONLY | FileAttribute.DIRECTORY | FileAttribute.NORMAL)
        if stored != self._read_dos_bits(path):
            # user.* xattrs need write access to the inode.
            if not mode & stat.S_IWUSR:
                os.chmod(path, mode | stat.S_IWUSR)
                try:
                    self._write_dos_bits(path, stored)
                except OSError:
                    os.chmod(path, mode)
                    raise
                os.chmod(path, new_mode)
                return
            self._write_dos_bits(path, stored)

        if new_mode != mode:
            os.chmod(path, new_mode)


def default_backend() -> AttributeBackend:
    """Return the attribute backend for the running platform."""
    if os.name == "nt":
        return WindowsAttributeBackend()
    return PosixAttributeBackend()


__all__ = [
    "AttributeBackend",
    "DOSATTRIB_XATTR",
    "WindowsAttributeBackend",
    "PosixAttributeBackend",
    "parse_dosattrib",
    "format_dosattrib",
    "default_backend",
]
