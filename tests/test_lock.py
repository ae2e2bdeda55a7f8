"""Tests for the per-destination sync lock."""

import subprocess
import sys

import pytest

from content_sync.errors import SyncInProgressError
from content_sync.sync.lock import DestinationLock, lock_file_for

_TRY_LOCK = """
import sys
from pathlib import Path
from content_sync.sync.lock import DestinationLock

lock = DestinationLock(Path(sys.argv[1]), Path(sys.argv[2]))
print("acquired" if lock.acquire() else "busy")
"""


class TestDestinationLock:
    def test_lock_file_lives_outside_destination(self, content_folder, tmp_path):
        path = lock_file_for(content_folder, tmp_path / "locks")
        assert not path.is_relative_to(content_folder)
        assert lock_file_for(content_folder).parent != content_folder

    def test_same_destination_same_lock_file(self, content_folder, tmp_path):
        assert lock_file_for(content_folder, tmp_path) == lock_file_for(content_folder / "posts" / "..", tmp_path)

    def test_second_holder_rejected(self, content_folder, tmp_path):
        with DestinationLock(content_folder, tmp_path / "locks"):
            with pytest.raises(SyncInProgressError):
                with DestinationLock(content_folder, tmp_path / "locks"):
                    pass

    def test_released_on_exit(self, content_folder, tmp_path):
        with DestinationLock(content_folder, tmp_path / "locks"):
            pass
        lock = DestinationLock(content_folder, tmp_path / "locks")
        assert lock.acquire()
        lock.release()

    def test_different_destinations_do_not_conflict(self, tmp_path):
        locks = tmp_path / "locks"
        with DestinationLock(tmp_path / "site-a", locks):
            with DestinationLock(tmp_path / "site-b", locks):
                pass

    def test_held_lock_blocks_another_process(self, content_folder, tmp_path):
        locks = tmp_path / "locks"
        args = [sys.executable, "-c", _TRY_LOCK, str(content_folder), str(locks)]

        with DestinationLock(content_folder, locks):
            busy = subprocess.run(args, capture_output=True, text=True, check=True)
        free = subprocess.run(args, capture_output=True, text=True, check=True)

        assert busy.stdout.strip() == "busy"
        assert free.stdout.strip() == "acquired"

    def test_release_without_acquire_is_noop(self, content_folder, tmp_path):
        DestinationLock(content_folder, tmp_path).release()
