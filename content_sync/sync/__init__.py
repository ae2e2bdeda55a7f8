"""One-way mirror of flagged notes into the content folder."""

from .engine import SyncEngine
from .lock import DestinationLock
from .mirror import copy_or_update, list_destination, prune_orphans
from .models import (
    CopyOutcome,
    CopyResult,
    DestinationEntry,
    ErrorKind,
    PruneOutcome,
    PruneResult,
    SyncError,
    SyncReport,
)
from .selector import is_truthy, select_files

__all__ = [
    "CopyOutcome",
    "CopyResult",
    "DestinationEntry",
    "DestinationLock",
    "ErrorKind",
    "PruneOutcome",
    "PruneResult",
    "SyncEngine",
    "SyncError",
    "SyncReport",
    "copy_or_update",
    "is_truthy",
    "list_destination",
    "prune_orphans",
    "select_files",
]
