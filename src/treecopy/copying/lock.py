"""File-based write scope held for the duration of a copy batch."""

from __future__ import annotations

import contextlib
import json
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

from treecopy.infrastructure import config
from treecopy.infrastructure.logger import logger

from .errors import CopyLockError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class LockInfo:
    def __init__(self, pid: int, timestamp: float) -> None:
        self.pid = pid
        self.timestamp = timestamp

    def to_dict(self) -> dict[str, int | float]:
        return {"pid": self.pid, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict[str, int | float]) -> LockInfo:
        return cls(pid=int(data["pid"]), timestamp=float(data["timestamp"]))


def _get_lock_path(lock_path: Path | None) -> Path:
    return lock_path or Path.cwd() / config.LOCK_FILE


def _is_stale(lock: LockInfo) -> bool:
    return time.time() - lock.timestamp > config.LOCK_STALE_TIMEOUT_S


def _is_process_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


def _read_lock(lock_path: Path) -> LockInfo:
    return LockInfo.from_dict(json.loads(lock_path.read_text(encoding="utf-8")))


def _create_lock_file(lock_path: Path, lock_info: LockInfo) -> None:
    # Atomic creation -- fails if file already exists
    fd = os.open(str(lock_path), os.O_WRONLY | os.O_CREAT | os.O_EXCL)
    try:
        os.write(fd, json.dumps(lock_info.to_dict()).encode())
    finally:
        os.close(fd)


def acquire_lock(lock_path: Path | None = None) -> Callable[[], None]:
    """Acquire the exclusive write lock. Returns a release function."""
    path = _get_lock_path(lock_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    lock_info = LockInfo(pid=os.getpid(), timestamp=time.time())

    try:
        _create_lock_file(path, lock_info)
        return lambda: _release(path)
    except FileExistsError:
        pass

    # Lock file exists -- check if it's stale or from a dead process
    try:
        existing = _read_lock(path)
    except (OSError, ValueError, KeyError, TypeError):
        # Corrupt or unreadable -- overwrite
        existing = None

    if existing is not None and not _is_stale(existing) and _is_process_alive(existing.pid):
        ts_iso = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(existing.timestamp))
        raise CopyLockError(
            f"Copy in progress (pid {existing.pid}, started {ts_iso}). If this is stale, delete {path}",
            {"pid": existing.pid, "lock_path": str(path)},
        )

    logger.warning("Taking over stale copy lock", lock_path=str(path))
    with contextlib.suppress(FileNotFoundError):
        path.unlink()

    try:
        _create_lock_file(path, lock_info)
    except FileExistsError as err:
        raise CopyLockError("Lock contention: another process acquired the lock. Retry.") from err

    return lambda: _release(path)


def _release(path: Path) -> None:
    """Remove the lock file if this process owns it."""
    if not path.exists():
        return
    try:
        lock = _read_lock(path)
    except (OSError, ValueError, KeyError, TypeError):
        # Corrupt -- safe to remove
        with contextlib.suppress(FileNotFoundError):
            path.unlink()
        return
    # Only release our own lock
    if lock.pid == os.getpid():
        with contextlib.suppress(FileNotFoundError):
            path.unlink()


def is_locked(lock_path: Path | None = None) -> bool:
    """Check whether a valid (non-stale) lock is held."""
    path = _get_lock_path(lock_path)
    if not path.exists():
        return False

    try:
        lock = _read_lock(path)
    except (OSError, ValueError, KeyError, TypeError):
        return False
    return not _is_stale(lock) and _is_process_alive(lock.pid)


@contextlib.contextmanager
def write_scope(lock_path: Path | None = None) -> Iterator[None]:
    """Hold the write lock for the body of a ``with`` block."""
    release = acquire_lock(lock_path)
    try:
        yield
    finally:
        release()
