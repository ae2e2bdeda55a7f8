"""Inter-process lock guarding one sync per destination folder."""

from __future__ import annotations

import fcntl
import hashlib
import logging
import os
import tempfile
from pathlib import Path

from content_sync.errors import SyncInProgressError

logger = logging.getLogger(__name__)


def lock_file_for(destination_root: Path, lock_dir: Path | None = None) -> Path:
    """Lock path for a destination. It lives outside the destination so prune never sees it."""
    key = hashlib.sha256(str(Path(destination_root).resolve()).encode()).hexdigest()[:16]
    return (lock_dir or Path(tempfile.gettempdir())) / f"content-sync-{key}.lock"


class DestinationLock:
    """Non-blocking ``flock`` on a per-destination lock file.

    Each acquire opens its own descriptor, so two holders conflict whether
    they are in different processes or in the same one.
    """

    def __init__(self, destination_root: Path, lock_dir: Path | None = None) -> None:
        self.lock_file = lock_file_for(destination_root, lock_dir)
        self._fd: int | None = None

    def acquire(self) -> bool:
        self.lock_file.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(str(self.lock_file), os.O_CREAT | os.O_RDWR)
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            os.close(fd)
            return False
        self._fd = fd
        return True

    def release(self) -> None:
        if self._fd is None:
            return
        try:
            fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> DestinationLock:
        if not self.acquire():
            logger.warning("Sync already running for lock %s", self.lock_file)
            raise SyncInProgressError()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()
