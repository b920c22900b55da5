# infra/settings.py
"""
Environment-driven settings for replacements.

All variables are optional:
    SAFESWAP_BACKUP_SUFFIX     suffix appended to the target name for backups
    SAFESWAP_RENAME_ATTEMPTS   tries for each rename before giving up
    SAFESWAP_RENAME_BACKOFF    base delay (seconds) between rename tries
    SAFESWAP_LOG_DIR           directory for the rotating log file
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from core.backup import DEFAULT_BACKUP_SUFFIX

ENV_PREFIX = "SAFESWAP_"


@dataclass(frozen=True)
class ReplaceSettings:
    backup_suffix: str = DEFAULT_BACKUP_SUFFIX
    rename_attempts: int = 6
    rename_backoff: float = 0.06
    log_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.backup_suffix or os.sep in self.backup_suffix or "/" in self.backup_suffix:
            raise ValueError(f"backup_suffix must be a plain file-name suffix, got {self.backup_suffix!r}")
        if self.rename_attempts < 1:
            raise ValueError("rename_attempts must be >= 1")
        if self.rename_backoff < 0:
            raise ValueError("rename_backoff must be >= 0")


def _env_number(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from e


def load_settings(env: Optional[Mapping[str, str]] = None) -> ReplaceSettings:
    """Build settings from `env` (defaults to os.environ)."""
    env = os.environ if env is None else env
    log_dir = env.get(ENV_PREFIX + "LOG_DIR")
    return ReplaceSettings(
        backup_suffix=env.get(ENV_PREFIX + "BACKUP_SUFFIX") or DEFAULT_BACKUP_SUFFIX,
        rename_attempts=_env_number(env, "RENAME_ATTEMPTS", int, 6),
        rename_backoff=_env_number(env, "RENAME_BACKOFF", float, 0.06),
        log_dir=Path(log_dir) if log_dir else None,
    )
