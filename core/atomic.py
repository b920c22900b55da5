# core/atomic.py
from __future__ import annotations

import os
import time
import errno
import random
import logging
from typing import Optional

from core.platform import clear_readonly

logger = logging.getLogger(__name__)

# Errors worth waiting out: another process briefly holding the file.
TRANSIENT_ERRNOS = (errno.EACCES, errno.EPERM, errno.ETXTBSY, errno.EBUSY)


def replace_file(src: str, dst: str, attempts: int = 6, base_backoff: float = 0.06) -> None:
    """
    Atomically rename src onto dst, with retries for transient locks.
    - Uses os.replace, so dst is swapped in a single step on the same volume.
    - Never falls back to copying: a cross-device move (EXDEV) fails at once.
    - Exponential backoff with jitter between attempts.

    Raises the last OSError if all attempts fail.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    last_exc: Optional[OSError] = None
    for i in range(attempts):
        try:
            os.replace(src, dst)
            return
        except OSError as e:
            last_exc = e
            if e.errno not in TRANSIENT_ERRNOS or i == attempts - 1:
                break
            sleep_time = (base_backoff * (2 ** i)) + random.uniform(0, base_backoff)
            logger.debug("rename %s -> %s busy (%s), retry %d", src, dst, e, i + 1)
            time.sleep(min(sleep_time, 1.0))
            if os.name == "nt":
                clear_readonly(dst)

    if last_exc:
        raise last_exc
    raise OSError(f"replace_file: failed to move {src} to {dst} without an explicit exception")
