# core/platform.py
"""
Platform-specific file helpers used around the destructive steps.
Everything here is best effort: a failure must never mask the real outcome
of a replacement.
"""
from __future__ import annotations

import os
import stat

if os.name == "nt":
    import ctypes
    from ctypes import wintypes

    FILE_ATTRIBUTE_NORMAL = 0x80

    _SetFileAttributesW = ctypes.windll.kernel32.SetFileAttributesW
    _SetFileAttributesW.argtypes = [wintypes.LPCWSTR, wintypes.DWORD]
    _SetFileAttributesW.restype = wintypes.BOOL


def clear_readonly(path: str) -> None:
    """Clear the read-only attribute on Windows so the file can be deleted or replaced."""
    if os.name != "nt" or not os.path.exists(path):
        return

    try:
        mode = os.stat(path).st_mode
        if not (mode & stat.S_IWRITE):
            os.chmod(path, mode | stat.S_IWRITE)
    except OSError:
        pass

    try:
        _SetFileAttributesW(path, FILE_ATTRIBUTE_NORMAL)
    except Exception:
        pass


def fsync_file(path: str) -> None:
    """Best-effort flush of a file's data to disk."""
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


def fsync_dir(path: str) -> None:
    """
    Best-effort flush of a directory entry table, so a rename or unlink
    inside it survives a power loss. No-op on Windows.
    """
    if os.name == "nt":
        return
    try:
        dir_fd = os.open(path or ".", os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(dir_fd)
    except OSError:
        pass
    finally:
        os.close(dir_fd)


def fsync_path(path: str) -> None:
    """Sync a file and then its containing directory."""
    fsync_file(path)
    fsync_dir(os.path.dirname(path))
