# services/ops.py
"""
Operations factory for ReplaceWorker instances.

Keeps callers tiny: they hand over paths, this module builds the pairs and
loads settings from the environment.

- replace_files: move each staged file onto its target.
- self_update:   move a downloaded build onto the running executable,
                 optionally unpacking a .tar.gz first.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from typing import Dict, Optional

from core.archive import extract_archive
from core.fileops import absolute_path, has_write_permission
from infra.bundled import current_executable_path
from infra.settings import ReplaceSettings, load_settings
from workers.replacer import ReplaceWorker


def replace_files(
    updates: Dict[str, str],
    verbose: bool = False,
    settings: Optional[ReplaceSettings] = None,
    parent: Optional[object] = None,
) -> ReplaceWorker:
    """
    Build a ReplaceWorker for a {target: source} mapping.

    Args:
        updates:  target path -> staged file with the new content.
        verbose:  print progress lines for each replacement.
        settings: override environment settings.
        parent:   Optional QObject parent.

    Returns:
        ReplaceWorker ready to start.
    """
    pairs = [(absolute_path(src), absolute_path(dst)) for dst, src in (updates or {}).items()]
    return ReplaceWorker(pairs, verbose, settings or load_settings(), parent)


def self_update(
    new_build: str,
    archive_member: Optional[str] = None,
    verbose: bool = False,
    settings: Optional[ReplaceSettings] = None,
    parent: Optional[object] = None,
) -> ReplaceWorker:
    """
    Build a ReplaceWorker that swaps the running executable for `new_build`.

    If `archive_member` is given, `new_build` is a .tar.gz: it is extracted
    into a fresh staging directory next to the executable (same volume, so
    the rename stays atomic) and the named member becomes the source. The
    staging directory is removed when the worker finishes, or at once if
    extraction fails.

    Raises:
        PermissionError: the executable cannot be written by this user.
        OSError / tarfile.TarError: locating the executable or extracting failed.
    """
    exe = current_executable_path()
    if not has_write_permission(exe):
        raise PermissionError(f"No write permission for {exe}")

    source = absolute_path(new_build)
    scratch = []
    if archive_member:
        staging = tempfile.mkdtemp(prefix=f".{os.path.basename(exe)}-update-", dir=os.path.dirname(exe))
        try:
            extract_archive(source, staging)
        except Exception:
            shutil.rmtree(staging, ignore_errors=True)
            raise
        scratch.append(staging)
        source = os.path.join(staging, archive_member)

    return ReplaceWorker([(source, exe)], verbose, settings or load_settings(), parent, scratch_dirs=scratch)
