"""Tests for the file-based write scope."""

from __future__ import annotations

import json
import os
import time
from typing import TYPE_CHECKING

import pytest

from treecopy.copying.errors import CopyLockError
from treecopy.copying.lock import acquire_lock, is_locked, write_scope
from treecopy.infrastructure.config import LOCK_FILE

if TYPE_CHECKING:
    from pathlib import Path


class TestLock:
    @pytest.fixture(autouse=True)
    def _setup(self, copy_tmp: Path) -> None:
        self.tmp_dir = copy_tmp
        self.lock_path = copy_tmp / LOCK_FILE

    def _write_lock(self, pid: int, timestamp: float) -> None:
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        self.lock_path.write_text(json.dumps({"pid": pid, "timestamp": timestamp}))

    def test_acquire_lock_returns_release_function(self) -> None:
        release = acquire_lock()
        assert callable(release)
        assert self.lock_path.exists()
        release()
        assert not self.lock_path.exists()

    def test_is_locked_tracks_acquire_and_release(self) -> None:
        assert is_locked() is False
        release = acquire_lock()
        assert is_locked() is True
        release()
        assert is_locked() is False

    def test_second_acquire_while_held_fails(self) -> None:
        release = acquire_lock()
        try:
            with pytest.raises(CopyLockError):
                acquire_lock()
        finally:
            release()

    def test_stale_lock_is_taken_over(self) -> None:
        self._write_lock(os.getpid(), time.time() - 24 * 60 * 60)
        release = acquire_lock()
        assert is_locked() is True
        release()

    def test_corrupt_lock_is_taken_over(self) -> None:
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        self.lock_path.write_text("not json")
        release = acquire_lock()
        assert is_locked() is True
        release()

    def test_release_leaves_foreign_lock_alone(self) -> None:
        release = acquire_lock()
        self._write_lock(os.getpid() + 100000, time.time())
        release()
        assert self.lock_path.exists()

    def test_explicit_lock_path(self) -> None:
        custom = self.tmp_dir / "elsewhere" / "copy.lock"
        with write_scope(custom):
            assert is_locked(custom) is True
            assert is_locked() is False
        assert not custom.exists()

    def test_write_scope_releases_on_error(self) -> None:
        with pytest.raises(RuntimeError), write_scope():
            raise RuntimeError("boom")
        assert is_locked() is False
