from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class CopyOutcome(str, Enum):
    """What Mirror-Copy did with one selected note."""

    created = "created"
    updated = "updated"
    skipped = "skipped"
    failed = "failed"


class PruneOutcome(str, Enum):
    """What Mirror-Prune did with one destination entry."""

    kept = "kept"
    removed = "removed"
    remove_failed = "remove_failed"


class ErrorKind(str, Enum):
    metadata_unavailable = "metadata_unavailable"
    copy_failed = "copy_failed"
    delete_failed = "delete_failed"
    destination_unreadable = "destination_unreadable"


class CopyResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    relative_path: str
    outcome: CopyOutcome
    reason: str | None = None


class PruneResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    outcome: PruneOutcome
    reason: str | None = None


class DestinationEntry(BaseModel):
    """A file, symlink or folder under the destination root, named by its root-relative path."""

    model_config = ConfigDict(frozen=True)

    name: str
    absolute_path: Path
    modified_time: int
    is_dir: bool = False


class SyncError(BaseModel):
    path: str
    kind: ErrorKind
    error: str


class SyncReport(BaseModel):
    selected: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    removed: int = 0
    errors: list[SyncError] = Field(default_factory=list)
    duration: float = 0.0
    dry_run: bool = False

    def record_copy(self, result: CopyResult) -> None:
        if result.outcome is CopyOutcome.created:
            self.created += 1
        elif result.outcome is CopyOutcome.updated:
            self.updated += 1
        elif result.outcome is CopyOutcome.skipped:
            self.skipped += 1
        else:
            self.errors.append(SyncError(
                path=result.relative_path,
                kind=ErrorKind.copy_failed,
                error=result.reason or "unknown error",
            ))

    def record_prune(self, result: PruneResult) -> None:
        if result.outcome is PruneOutcome.removed:
            self.removed += 1
        elif result.outcome is PruneOutcome.remove_failed:
            self.errors.append(SyncError(
                path=result.name,
                kind=ErrorKind.delete_failed,
                error=result.reason or "unknown error",
            ))
