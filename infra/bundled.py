# infra/bundled.py
from __future__ import annotations

import os
import sys
from pathlib import Path

from core.fileops import resolve_path
from core.version import APP_NAME


def get_appdata_root() -> Path:
    base = (
        os.environ.get("LOCALAPPDATA")
        or os.environ.get("APPDATA")
        or os.environ.get("XDG_STATE_HOME")
        or str(Path.home() / ".local" / "state")
    )
    return Path(base) / APP_NAME


def get_logs_dir() -> Path:
    p = get_appdata_root() / "logs"
    p.mkdir(parents=True, exist_ok=True)
    return p


def current_executable_path() -> str:
    """
    Resolved path of sys.executable: the bundled binary in a PyInstaller
    build, the Python interpreter otherwise.
    Raises FileNotFoundError if the interpreter cannot report it.
    """
    exe = sys.executable
    if not exe:
        raise FileNotFoundError("sys.executable is empty; cannot locate the running executable")
    return resolve_path(exe)
