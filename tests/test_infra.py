from __future__ import annotations

import logging
import os
import sys

import pytest

import infra.bundled as bundled
from infra.logging import get_logger, log_worker_event


def test_appdata_root_prefers_localappdata(tmp_path, monkeypatch):
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
    assert bundled.get_appdata_root() == tmp_path / "SafeSwap"


def test_appdata_root_falls_back_to_xdg_state(tmp_path, monkeypatch):
    monkeypatch.delenv("LOCALAPPDATA", raising=False)
    monkeypatch.delenv("APPDATA", raising=False)
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
    assert bundled.get_appdata_root() == tmp_path / "SafeSwap"


def test_current_executable_path_is_resolved():
    path = bundled.current_executable_path()
    assert os.path.isabs(path)
    assert path == os.path.realpath(sys.executable)


def test_current_executable_path_empty(monkeypatch):
    monkeypatch.setattr(bundled.sys, "executable", "")
    with pytest.raises(FileNotFoundError):
        bundled.current_executable_path()


def test_logger_writes_monthly_file_once(tmp_path):
    name = "SafeSwapTest"
    logger = get_logger(name, log_dir=tmp_path)
    try:
        assert get_logger(name, log_dir=tmp_path) is logger
        assert len(logger.handlers) == 1
        logger.info("hello")
        logger.handlers[0].flush()
        files = list(tmp_path.glob("safeswap_*.log"))
        assert len(files) == 1
        assert "hello" in files[0].read_text(encoding="utf-8")
    finally:
        handler = logger.handlers[0]
        for lib in ("core", "workers", "services"):
            logging.getLogger(lib).removeHandler(handler)
        logger.removeHandler(handler)
        handler.close()


def test_log_worker_event_levels(caplog):
    with caplog.at_level(logging.INFO, logger="SafeSwap"):
        log_worker_event("Replacer", "start", "2 file(s)")
        log_worker_event("Replacer", "unrecoverable", "move x to y")

    levels = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert (logging.INFO, "Replacer start: 2 file(s)") in levels
    assert (logging.ERROR, "Replacer unrecoverable: move x to y") in levels
