"""Selector: picks the notes flagged for publishing."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Any

from content_sync.errors import MetadataUnavailable
from content_sync.sync.models import ErrorKind, SyncError
from content_sync.vault.models import Note

logger = logging.getLogger(__name__)


def is_truthy(value: Any) -> bool:
    """Whether a frontmatter value switches a flag on.

    None, False, zero, NaN and the empty string are off. Every other object,
    including empty lists and mappings, is on. This is not ``bool()``.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def select_files(
    notes: Iterable[Note],
    flag_key: str,
    errors: list[SyncError] | None = None,
) -> list[Note]:
    """Return the notes whose ``flag_key`` is truthy, in source order.

    A note whose metadata cannot be read is left out and, when ``errors`` is
    given, recorded there. It never stops the scan.
    """
    selected: list[Note] = []
    for note in notes:
        try:
            metadata = note.require_metadata()
        except MetadataUnavailable as exc:
            logger.warning("Skipping %s: %s", note.relative_path, exc.reason)
            if errors is not None:
                errors.append(SyncError(
                    path=note.relative_path,
                    kind=ErrorKind.metadata_unavailable,
                    error=exc.reason,
                ))
            continue
        if is_truthy(metadata.get(flag_key)):
            selected.append(note)
    return selected
