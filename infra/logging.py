# infra/logging.py
"""
Minimal logging infrastructure for SafeSwap.
The rotating file handler is attached to the root "SafeSwap" logger once;
library modules log through logging.getLogger(__name__) and only reach the
file when the application has called get_logger().
"""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from pathlib import Path
from typing import Optional

from core.version import APP_NAME, __version__ as APP_VERSION
from infra.bundled import get_logs_dir

# Module loggers under these packages are routed to the app handler.
_LIBRARY_LOGGERS = ("core", "workers", "services")


def get_logger(name: str = APP_NAME, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Get or create the application logger with a rotating file handler.

    Args:
        name: Logger name (default: SafeSwap)
        log_dir: Directory for the log file (default: <app data>/logs)

    Returns:
        Configured logger instance

    Log location:
        <log_dir>/safeswap_YYYY-MM.log
    """
    logger = logging.getLogger(name)

    # Only configure once
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    if log_dir is None:
        log_dir = get_logs_dir()
    else:
        log_dir.mkdir(parents=True, exist_ok=True)

    # Monthly log file naming
    log_file = log_dir / f"safeswap_{datetime.now().strftime('%Y-%m')}.log"

    # Rotating handler: 5MB max, keep 3 backups
    handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding='utf-8'
    )

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    for lib in _LIBRARY_LOGGERS:
        lib_logger = logging.getLogger(lib)
        lib_logger.setLevel(logging.INFO)
        lib_logger.addHandler(handler)

    logger.info("=" * 60)
    logger.info(f"{APP_NAME} {APP_VERSION} logging to {log_file}")
    return logger


def log_worker_event(worker_type: str, event: str, details: str = ""):
    """
    Log worker lifecycle events.

    Args:
        worker_type: Type of worker (Replacer)
        event: Event type (start/finished/error/cancelled/unrecoverable)
        details: Additional details (file counts, error messages)
    """
    logger = logging.getLogger(APP_NAME)
    level = logging.ERROR if event in ("error", "unrecoverable") else logging.INFO
    if details:
        logger.log(level, f"{worker_type} {event}: {details}")
    else:
        logger.log(level, f"{worker_type} {event}")
