"""Mirror-Copy and Mirror-Prune: keep the destination folder in step with the selection."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from content_sync.errors import CopyFailed, DeleteFailed, DestinationUnreadable
from content_sync.notify import Notifier
from content_sync.sync.models import (
    CopyOutcome,
    CopyResult,
    DestinationEntry,
    PruneOutcome,
    PruneResult,
)
from content_sync.vault.models import Note

logger = logging.getLogger(__name__)


# -- Copy ----------------------------------------------------------------


def _destination_for(note: Note, destination_root: Path) -> Path:
    target = destination_root / note.relative_path
    if not target.resolve().is_relative_to(destination_root.resolve()):
        raise CopyFailed(note.relative_path, "Path traversal detected")
    return target


def _decide(note: Note, target: Path) -> CopyOutcome:
    """Created if missing, updated if the source is strictly newer, else skipped."""
    try:
        source_mtime = note.modified_time()
        if not target.exists():
            return CopyOutcome.created
        if source_mtime > target.stat().st_mtime_ns:
            return CopyOutcome.updated
    except OSError as exc:
        raise CopyFailed(note.relative_path, exc) from exc
    return CopyOutcome.skipped


def copy_or_update(
    note: Note,
    destination_root: Path,
    notifier: Notifier,
    *,
    dry_run: bool = False,
) -> CopyResult:
    """Copy one selected note into the destination when it is missing or stale.

    Intermediate directories are not created; a missing parent folder makes
    the copy fail like any other I/O error. Failures are notified and
    returned, never raised.
    """
    try:
        target = _destination_for(note, destination_root)
        outcome = _decide(note, target)
        if outcome is CopyOutcome.skipped:
            logger.debug("Up to date: %s", note.relative_path)
            return CopyResult(relative_path=note.relative_path, outcome=outcome)

        verb = "adding" if outcome is CopyOutcome.created else "updating"
        notifier.notify(f"{verb} {note.relative_path}")
        if dry_run:
            # Same failure a real copy would hit.
            if not target.parent.is_dir():
                raise CopyFailed(note.relative_path, f"No such directory: {target.parent}")
        else:
            try:
                shutil.copyfile(note.absolute_path, target)
            except OSError as exc:
                raise CopyFailed(note.relative_path, exc) from exc
        logger.info("%s: %s", outcome.value.capitalize(), note.relative_path)
        return CopyResult(relative_path=note.relative_path, outcome=outcome)
    except CopyFailed as exc:
        logger.error("Error copying %s: %s", note.relative_path, exc.reason)
        notifier.notify(f"Error: {exc}")
        return CopyResult(relative_path=note.relative_path, outcome=CopyOutcome.failed, reason=exc.reason)


# -- Prune ---------------------------------------------------------------


def _raise(err: OSError) -> None:
    raise err


def list_destination(destination_root: Path) -> list[DestinationEntry]:
    """Everything below the root, keyed by its root-relative path.

    Entries come bottom-up: a folder is listed after all of its contents, so
    deleting in order empties a folder before it is removed. Symlinked
    folders are not followed and count as plain entries. Any listing error
    raises DestinationUnreadable.
    """
    entries: list[DestinationEntry] = []
    try:
        for dirpath, dirnames, filenames in os.walk(destination_root, topdown=False, onerror=_raise):
            current = Path(dirpath)
            folders = sorted(d for d in dirnames if not (current / d).is_symlink())
            links = [d for d in dirnames if d not in folders]
            for name in sorted(filenames + links) + folders:
                path = current / name
                entries.append(DestinationEntry(
                    name=path.relative_to(destination_root).as_posix(),
                    absolute_path=path,
                    modified_time=path.lstat().st_mtime_ns,
                    is_dir=name in folders,
                ))
    except OSError as exc:
        raise DestinationUnreadable(str(destination_root), exc) from exc
    return entries


def _ancestors(relative_path: str) -> set[str]:
    parts = relative_path.split("/")[:-1]
    return {"/".join(parts[:i]) for i in range(1, len(parts) + 1)}


def prune_orphans(
    destination_root: Path,
    selected_notes: Iterable[Note],
    notifier: Notifier,
    *,
    dry_run: bool = False,
) -> list[PruneResult]:
    """Delete destination entries that match no selected note's relative path.

    Folders on the way to a selected note are kept; any other folder is
    removed once its contents are gone. A folder that still holds something
    fails as DeleteFailed.
    """
    wanted = {note.relative_path for note in selected_notes}
    wanted_folders = set().union(*(_ancestors(p) for p in wanted))
    results: list[PruneResult] = []

    for entry in list_destination(destination_root):
        keep = entry.name in wanted_folders if entry.is_dir else entry.name in wanted
        if keep:
            results.append(PruneResult(name=entry.name, outcome=PruneOutcome.kept))
            continue

        notifier.notify(f"removing {entry.name}")
        if not dry_run:
            try:
                if entry.is_dir:
                    entry.absolute_path.rmdir()
                else:
                    entry.absolute_path.unlink()
            except OSError as exc:
                err = DeleteFailed(entry.name, exc)
                logger.error("Error removing %s: %s", entry.name, err.reason)
                notifier.notify(f"Error: {err}")
                results.append(PruneResult(name=entry.name, outcome=PruneOutcome.remove_failed, reason=err.reason))
                continue

        logger.info("Removed: %s", entry.name)
        results.append(PruneResult(name=entry.name, outcome=PruneOutcome.removed))

    return results
