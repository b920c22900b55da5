from __future__ import annotations

import os

import pytest

import core.backup as backup_mod
from core.backup import backup_path_for, create_backup, remove_backup, restore_backup
from core.errors import BackupError


def test_backup_path_is_a_sibling_of_the_target():
    target = os.path.join(os.sep, "a", "app")
    assert backup_path_for(target) == os.path.join(os.sep, "a", "app-backup")
    assert backup_path_for(target, ".old") == os.path.join(os.sep, "a", "app.old")


def test_create_backup_copies_target(tmp_path):
    target = tmp_path / "app"
    target.write_bytes(b"v1")
    os.chmod(target, 0o755)

    backup = create_backup(str(target))

    assert backup == str(tmp_path / "app-backup")
    assert (tmp_path / "app-backup").read_bytes() == b"v1"
    assert target.read_bytes() == b"v1"
    assert os.stat(backup).st_mode == os.stat(target).st_mode


def test_create_backup_refuses_to_overwrite_leftover(tmp_path):
    target = tmp_path / "app"
    target.write_bytes(b"v1")
    leftover = tmp_path / "app-backup"
    leftover.write_bytes(b"v0 awaiting manual recovery")

    with pytest.raises(BackupError) as exc:
        create_backup(str(target))

    assert exc.value.backup_path == str(leftover)
    assert leftover.read_bytes() == b"v0 awaiting manual recovery"
    assert target.read_bytes() == b"v1"


def test_create_backup_copy_failure_cleans_partial_file(tmp_path, monkeypatch):
    target = tmp_path / "app"
    target.write_bytes(b"v1")

    def half_copy(src, dst):
        with open(dst, "wb") as f:
            f.write(b"v")
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(backup_mod, "copy_file", half_copy)

    with pytest.raises(BackupError) as exc:
        create_backup(str(target))

    assert "No space left" in exc.value.message
    assert isinstance(exc.value.__cause__, OSError)
    assert not (tmp_path / "app-backup").exists()
    assert target.read_bytes() == b"v1"


def test_remove_backup_is_best_effort(tmp_path):
    b = tmp_path / "app-backup"
    b.write_bytes(b"v1")
    assert remove_backup(str(b)) is True
    assert not b.exists()
    assert remove_backup(str(b)) is False


def test_remove_backup_failure_does_not_raise(tmp_path, monkeypatch):
    b = tmp_path / "app-backup"
    b.write_bytes(b"v1")

    def refuse(path):
        raise PermissionError(13, "Permission denied", path)

    monkeypatch.setattr(backup_mod.os, "remove", refuse)
    assert remove_backup(str(b)) is False


def test_restore_backup_renames_over_target(tmp_path):
    b = tmp_path / "app-backup"
    b.write_bytes(b"v1")
    target = tmp_path / "app"

    restore_backup(str(b), str(target))

    assert target.read_bytes() == b"v1"
    assert not b.exists()


def test_restore_backup_failure_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        restore_backup(str(tmp_path / "missing-backup"), str(tmp_path / "app"), attempts=1)
