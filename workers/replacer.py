# workers/replacer.py
from __future__ import annotations

import os
import shutil
from typing import Any, Dict, List, Optional, Sequence, Tuple

from PyQt6.QtCore import QThread, pyqtSignal

from core.errors import ReplaceError, UnrecoverableError
from core.replace import safe_replace
from infra.logging import get_logger, log_worker_event
from infra.settings import ReplaceSettings


class ReplaceWorker(QThread):
    """
    Threaded replacer that moves a batch of (source, target) pairs into place.
    - Each pair goes through core.replace.safe_replace.
    - cancel() is honoured between pairs only; a replacement that has started
      always runs to commit or rollback.
    - An unrecoverable pair stops the batch: nothing after it is attempted.
    - scratch_dirs (e.g. an extracted update) are deleted once the batch ends,
      whatever the outcome.
    """

    # Signals
    progress = pyqtSignal(int, int)                 # (done, total)
    file_progress = pyqtSignal(int, int, str)       # (step, steps, filename)
    status = pyqtSignal(str)
    error = pyqtSignal(str)
    cancelled = pyqtSignal()
    unrecoverable = pyqtSignal(str, str)            # (backup_path, target)
    finished = pyqtSignal(dict, list)               # (stats, failures)

    def __init__(
        self,
        pairs: Sequence[Tuple[str, str]],
        verbose: bool = False,
        settings: Optional[ReplaceSettings] = None,
        parent: Optional[object] = None,
        scratch_dirs: Sequence[str] = (),
    ) -> None:
        super().__init__(parent)
        self._pairs = list(pairs or [])
        self._verbose = verbose
        self._settings = settings or ReplaceSettings()
        self._scratch_dirs = list(scratch_dirs)
        self._cancel = False
        get_logger(log_dir=self._settings.log_dir)

    # -------------------- API --------------------

    def cancel(self) -> None:
        self._cancel = True

    # -------------------- Thread entry --------------------

    def run(self) -> None:
        try:
            stats, failures = self._replace_all()
        finally:
            self._remove_scratch()

        log_worker_event("Replacer", "finished", f"Success: {stats['successes']}, Fail: {stats['failures']}")
        self.status.emit(f"Replace complete: {stats['successes']} succeeded, {stats['failures']} failed.")
        self.finished.emit(stats, failures)

    def _remove_scratch(self) -> None:
        for d in self._scratch_dirs:
            shutil.rmtree(d, ignore_errors=True)

    def _replace_all(self) -> Tuple[Dict[str, Any], List[Dict[str, str]]]:
        total = len(self._pairs)
        done = 0
        successes = 0
        failures: List[Dict[str, str]] = []
        halted = False

        log_worker_event("Replacer", "start", f"{total} file(s)")

        for source, target in self._pairs:
            if self._cancel:
                self.cancelled.emit()
                log_worker_event("Replacer", "cancelled")
                break

            name = os.path.basename(target) or target
            self.file_progress.emit(0, 1, name)

            try:
                safe_replace(source, target, self._verbose, settings=self._settings)
            except UnrecoverableError as e:
                failures.append({"filename": name, "target": target, "error": e.message, "code": e.error_code})
                log_worker_event("Replacer", "unrecoverable", e.message)
                self.unrecoverable.emit(e.backup_path, e.target)
                self.error.emit(e.message)
                halted = True
            except ReplaceError as e:
                failures.append({"filename": name, "target": target, "error": e.message, "code": e.error_code})
            except (OSError, ValueError) as e:
                failures.append({"filename": name, "target": target, "error": str(e), "code": "IO_ERROR"})
            else:
                successes += 1

            done += 1
            self.file_progress.emit(1, 1, name)
            self.progress.emit(done, total)
            if halted:
                break

        stats = {"total": total, "successes": successes, "failures": len(failures), "halted": halted}
        return stats, failures
