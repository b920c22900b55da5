# core/archive.py
from __future__ import annotations

import io
import logging
import tarfile

logger = logging.getLogger(__name__)


def extract_archive(source_file: str, dest_dir: str) -> None:
    """
    Unpack a .tar.gz into dest_dir.

    The whole archive is read into memory first, then handed to tarfile with
    the "data" filter (no absolute paths, no escaping links, no device files).
    Raises OSError on read failure and tarfile.TarError on a bad archive.
    """
    with open(source_file, "rb") as f:
        data = f.read()

    with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tar:
        tar.extractall(dest_dir, filter="data")

    logger.info("Extracted %s into %s", source_file, dest_dir)
