"""Publish flagged vault notes to an external content folder."""

from .config import ContentSyncSettings, SyncConfig, load_config
from .sync import SyncEngine, SyncReport
from .vault import FilesystemVault, Note

__version__ = "0.1.0"

__all__ = [
    "ContentSyncSettings",
    "FilesystemVault",
    "Note",
    "SyncConfig",
    "SyncEngine",
    "SyncReport",
    "load_config",
]
