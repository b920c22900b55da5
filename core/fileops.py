# core/fileops.py
"""
Leaf file helpers: path resolution, existence, copy, write probe.
Each one wraps a single platform call; none of them keep state.
"""
from __future__ import annotations

import os
import shutil

from core.errors import PathNotFoundError


def absolute_path(path: str) -> str:
    """
    Make `path` absolute against the current working directory.
    Not expected to fail; if the working directory itself is gone the
    OSError propagates and the caller should not try to recover.
    """
    return os.path.abspath(path)


def resolve_path(path: str) -> str:
    """Follow every symlink in `path`; raise PathNotFoundError if the chain is broken."""
    try:
        return os.path.realpath(path, strict=True)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise PathNotFoundError(path) from e


def resolve_target(path: str) -> str:
    """
    Resolve a replacement target that may not exist yet.

    A missing entry resolves through its parent directory; a dangling
    symlink is still reported as PathNotFoundError.
    """
    if os.path.lexists(path):
        return resolve_path(path)
    parent = os.path.dirname(absolute_path(path))
    return os.path.join(resolve_path(parent), os.path.basename(path))


def file_exists(path: str) -> bool:
    """True/False for present/absent; any other stat failure is raised."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    return True


def copy_file(src: str, dst: str) -> None:
    """
    Copy bytes and permission bits from src to dst.
    Not atomic: dst is written in place and may be left partial on error.
    """
    with open(src, "rb") as fin, open(dst, "wb") as fout:
        shutil.copyfileobj(fin, fout)
    shutil.copymode(src, dst)


def has_write_permission(path: str) -> bool:
    """Probe by opening read/write. Permission denied -> False; other errors propagate."""
    try:
        with open(path, "r+b"):
            pass
    except PermissionError:
        return False
    return True
