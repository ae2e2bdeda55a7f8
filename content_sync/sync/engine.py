"""SyncEngine — mirrors flagged vault notes into the content folder."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from content_sync.config.models import SyncConfig
from content_sync.errors import DestinationUnreadable
from content_sync.notify import Notifier
from content_sync.sync.lock import DestinationLock
from content_sync.sync.mirror import copy_or_update, prune_orphans
from content_sync.sync.models import ErrorKind, SyncError, SyncReport
from content_sync.sync.selector import select_files
from content_sync.vault.source import NoteSource

logger = logging.getLogger(__name__)


class SyncEngine:
    def __init__(self, source: NoteSource, notifier: Notifier, lock_dir: Path | None = None) -> None:
        """
        Args:
            source: Provider of the vault's notes and their frontmatter
            notifier: Sink for user-facing progress messages
            lock_dir: Where per-destination lock files go (system temp dir by default)
        """
        self.source = source
        self.notifier = notifier
        self.lock_dir = lock_dir

    def sync(self, config: SyncConfig, *, dry_run: bool = False) -> SyncReport:
        """One-shot mirror: select, copy what is missing or stale, prune the rest.

        Per-note and per-entry failures are reported and skipped. An
        unreadable destination ends only the prune phase. Raises
        SyncInProgressError if any other sync, in this process or another,
        holds the same destination, and VaultUnavailable if the notes cannot
        be listed at all.
        """
        with DestinationLock(config.destination_root, self.lock_dir):
            return self._run(config, dry_run)

    def _run(self, config: SyncConfig, dry_run: bool) -> SyncReport:
        start = time.monotonic()
        report = SyncReport(dry_run=dry_run)
        destination = config.destination_root

        notes = self.source.list_notes()
        selected = select_files(notes, config.flag_key, report.errors)
        report.selected = len(selected)
        logger.info("Selected %d of %d notes with %r set", len(selected), len(notes), config.flag_key)

        for note in selected:
            report.record_copy(copy_or_update(note, destination, self.notifier, dry_run=dry_run))

        # Prune strictly after every copy, once, against the full selection.
        try:
            for result in prune_orphans(destination, selected, self.notifier, dry_run=dry_run):
                report.record_prune(result)
        except DestinationUnreadable as exc:
            logger.error("Skipping prune: %s", exc)
            self.notifier.notify(f"Error: {exc}")
            report.errors.append(SyncError(
                path=exc.path,
                kind=ErrorKind.destination_unreadable,
                error=exc.reason,
            ))

        report.duration = time.monotonic() - start
        self.notifier.notify("Sync complete")
        return report
