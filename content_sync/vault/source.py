"""Source-note providers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

import yaml

from content_sync.errors import VaultUnavailable
from content_sync.vault.frontmatter import parse_frontmatter
from content_sync.vault.models import Note

logger = logging.getLogger(__name__)


@runtime_checkable
class NoteSource(Protocol):
    """Anything that can enumerate the vault's notes with their metadata."""

    def list_notes(self) -> list[Note]: ...


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


class FilesystemVault:
    """A vault laid out on disk: every non-hidden ``*.md`` file is a note.

    Dot-prefixed folders such as ``.obsidian`` and ``.trash`` are skipped.
    Notes come back sorted by relative path so runs are deterministic.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser().resolve()

    def list_notes(self) -> list[Note]:
        if not self.root.is_dir():
            raise VaultUnavailable(str(self.root), "not a directory")

        notes: list[Note] = []
        try:
            paths = sorted(self.root.rglob("*.md"))
        except OSError as exc:
            raise VaultUnavailable(str(self.root), exc) from exc

        for path in paths:
            relative = path.relative_to(self.root)
            if _is_hidden(relative) or not path.is_file():
                continue
            notes.append(self._load_note(path, relative.as_posix()))

        logger.debug("Found %d notes in %s", len(notes), self.root)
        return notes

    def _load_note(self, path: Path, relative_path: str) -> Note:
        try:
            metadata, _body = parse_frontmatter(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValueError) as exc:
            logger.warning("Could not read frontmatter of %s: %s", relative_path, exc)
            return Note(
                relative_path=relative_path,
                absolute_path=path,
                metadata=None,
                metadata_error=str(exc),
            )
        return Note(relative_path=relative_path, absolute_path=path, metadata=metadata)
