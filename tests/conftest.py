"""Shared test fixtures for content-sync."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from content_sync.config.models import SyncConfig
from content_sync.notify import Notifier


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    return root


@pytest.fixture
def content_folder(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    root.mkdir()
    return root


@pytest.fixture
def sync_config(content_folder: Path) -> SyncConfig:
    return SyncConfig(destination_root=content_folder, flag_key="publish")


@pytest.fixture
def notifier() -> MagicMock:
    """Notifier double; messages land in notifier.notify.call_args_list."""
    return MagicMock(spec=Notifier)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty cwd with an empty HOME so no real settings file is picked up."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    return work
