# core/backup.py
"""
Sibling backups of a file that is about to be deleted.

The backup lives next to the target (same directory, same volume) so it can
be renamed back atomically if the replacement fails.
"""
from __future__ import annotations

import os
import logging

from core.atomic import replace_file
from core.errors import BackupError
from core.fileops import copy_file
from core.platform import fsync_path

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_SUFFIX = "-backup"


def backup_path_for(target: str, suffix: str = DEFAULT_BACKUP_SUFFIX) -> str:
    """/a/app -> /a/app-backup"""
    return os.path.join(os.path.dirname(target), os.path.basename(target) + suffix)


def create_backup(target: str, suffix: str = DEFAULT_BACKUP_SUFFIX) -> str:
    """
    Copy `target` to its backup path and flush it to disk.

    Raises BackupError if the copy fails (a partial copy is removed) or if
    something already occupies the backup path. In both cases `target` has
    not been touched.
    """
    backup = backup_path_for(target, suffix)
    if os.path.lexists(backup):
        raise BackupError(target, backup, "a previous backup is still present; recover or remove it first")

    try:
        copy_file(target, backup)
    except OSError as e:
        remove_backup(backup)
        raise BackupError(target, backup, str(e)) from e

    fsync_path(backup)
    logger.info("Backed up %s to %s", target, backup)
    return backup


def remove_backup(backup: str) -> bool:
    """Best-effort delete. Returns False (and logs) instead of raising."""
    try:
        os.remove(backup)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Could not remove backup %s: %s", backup, e)
        return False
    return True


def restore_backup(backup: str, target: str, attempts: int = 6, base_backoff: float = 0.06) -> None:
    """Rename the backup back onto `target`. Any OSError is left to the caller."""
    replace_file(backup, target, attempts=attempts, base_backoff=base_backoff)
    logger.info("Restored %s from %s", target, backup)
