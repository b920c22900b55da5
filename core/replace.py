# core/replace.py
"""
Safe in-place replacement of a file (e.g. a program updating its own binary).

Protocol:
  resolve both paths -> check target -> back up target -> delete target
  -> atomic rename source onto target -> commit (drop backup) or roll back
  (rename backup onto target).

At every point either the original content is reachable (at the target or
in the backup) or the new content is at the target. If the rollback itself
fails, UnrecoverableError is raised and the backup is left on disk for the
operator.
"""
from __future__ import annotations

import os
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from core.atomic import replace_file
from core.backup import create_backup, remove_backup, restore_backup
from core.errors import RenameError, UnrecoverableError
from core.fileops import file_exists, resolve_path, resolve_target
from core.platform import clear_readonly, fsync_dir
from infra.settings import ReplaceSettings

logger = logging.getLogger(__name__)


class ReplaceState(Enum):
    RESOLVING = "resolving"
    CHECKING_TARGET = "checking_target"
    BACKING_UP = "backing_up"
    TARGET_REMOVED = "target_removed"
    RENAMED = "renamed"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    UNRECOVERABLE = "unrecoverable"


@dataclass
class ReplaceOperation:
    """One run of safe_replace; `history` lists every state entered, in order."""
    source: str
    target: str
    target_existed: bool = False
    backup_path: Optional[str] = None
    state: ReplaceState = ReplaceState.RESOLVING
    history: List[ReplaceState] = field(default_factory=lambda: [ReplaceState.RESOLVING])

    def enter(self, state: ReplaceState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug("%s: %s", self.target, state.value)


def _say(verbose: bool, msg: str) -> None:
    if verbose:
        print(msg)


def safe_replace(
    source: str,
    target: str,
    verbose: bool = False,
    *,
    settings: Optional[ReplaceSettings] = None,
) -> ReplaceOperation:
    """
    Move `source` onto `target` without ever losing both versions.

    Precondition: a single writer per target. There is no locking; two
    concurrent calls on the same target interleave unpredictably. Wrap calls
    in a file lock or mutex if several writers can race.

    Both paths must be on the same volume; a cross-device move fails with
    RenameError instead of degrading to a copy.

    Args:
        source: File holding the new content.
        target: Path that should end up holding it (may not exist yet).
        verbose: Print progress lines to stdout. No effect on the outcome.
        settings: Backup suffix and rename retry policy.

    Returns:
        The finished ReplaceOperation (state COMMITTED).

    Raises:
        PathNotFoundError: source missing or a symlink chain is broken.
        BackupError: the existing target could not be backed up (untouched).
        OSError: stat/delete failure before the rename (target intact).
        RenameError: the rename failed; target restored or never existed.
        UnrecoverableError: the rename and the restore both failed.
    """
    settings = settings or ReplaceSettings()
    retry = dict(attempts=settings.rename_attempts, base_backoff=settings.rename_backoff)

    op = ReplaceOperation(source=resolve_path(source), target=resolve_target(target))
    if op.source == op.target:
        raise ValueError(f"source and target are the same file: {op.target}")

    op.enter(ReplaceState.CHECKING_TARGET)
    op.target_existed = file_exists(op.target)

    if op.target_existed:
        op.enter(ReplaceState.BACKING_UP)
        _say(verbose, f"> Creating backup of existing file ({op.target})")
        op.backup_path = create_backup(op.target, settings.backup_suffix)

        clear_readonly(op.target)
        try:
            os.remove(op.target)
        except OSError:
            remove_backup(op.backup_path)
            raise
        op.enter(ReplaceState.TARGET_REMOVED)

    try:
        replace_file(op.source, op.target, **retry)
    except OSError as rename_err:
        logger.error("Move %s -> %s failed: %s", op.source, op.target, rename_err)
        if op.backup_path is None:
            raise RenameError(op.source, op.target, rename_err) from rename_err

        _say(verbose, "> Failed to move updated file, restoring from backup")
        try:
            restore_backup(op.backup_path, op.target, **retry)
        except OSError as restore_err:
            op.enter(ReplaceState.UNRECOVERABLE)
            logger.critical(
                "Unable to restore %s; original content is at %s", op.target, op.backup_path
            )
            _say(verbose, f"\nUnable to restore original file \nKindly move {op.backup_path} to {op.target} \n")
            raise UnrecoverableError(op.backup_path, op.target, rename_err, restore_err) from restore_err

        op.enter(ReplaceState.ROLLED_BACK)
        raise RenameError(op.source, op.target, rename_err) from rename_err

    op.enter(ReplaceState.RENAMED)
    fsync_dir(os.path.dirname(op.target))

    if op.backup_path is not None:
        _say(verbose, "> Removing backup file")
        remove_backup(op.backup_path)

    op.enter(ReplaceState.COMMITTED)
    _say(verbose, "> Move successful")
    logger.info("Replaced %s with %s", op.target, op.source)
    return op
