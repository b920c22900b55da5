# core/errors.py
"""
Exceptions raised by the replacement protocol.

Every error carries a user-ready `message` and a stable `error_code` so a
caller (or the worker layer) can report it without rebuilding the text.
Plain I/O failures from the leaf helpers are left as OSError.
"""
from __future__ import annotations

from typing import Optional


class ReplaceError(Exception):
    """Base class for replacement failures."""

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class PathNotFoundError(ReplaceError, FileNotFoundError):
    """A path (or a link in its symlink chain) does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        ReplaceError.__init__(self, f"Path not found: {path}", error_code="NOT_FOUND")


class BackupError(ReplaceError):
    """The existing target could not be protected; nothing was touched."""

    def __init__(self, target: str, backup_path: str, cause: str) -> None:
        self.target = target
        self.backup_path = backup_path
        message = f"Cannot back up {target} to {backup_path}: {cause}"
        super().__init__(message, error_code="BACKUP_FAILED")


class RenameError(ReplaceError):
    """
    Moving the new file into place failed.
    If the target existed, it has already been restored from its backup.
    """

    def __init__(self, source: str, target: str, original: OSError) -> None:
        self.source = source
        self.target = target
        self.original = original
        message = f"Cannot move {source} to {target}: {original}"
        super().__init__(message, error_code="RENAME_FAILED")


class UnrecoverableError(ReplaceError):
    """
    The rename failed and putting the backup back failed too.

    The target is gone and the original content only exists at `backup_path`;
    an operator has to move it back by hand.
    """

    def __init__(
        self,
        backup_path: str,
        target: str,
        rename_error: OSError,
        restore_error: Optional[OSError] = None,
    ) -> None:
        self.backup_path = backup_path
        self.target = target
        self.rename_error = rename_error
        self.restore_error = restore_error
        message = (
            f"Failed to move file and failed to restore backup; "
            f"move {backup_path} to {target} manually"
        )
        super().__init__(message, error_code="UNRECOVERABLE")
