"""Vault access: notes, their frontmatter, and the providers that list them."""

from .frontmatter import parse_frontmatter
from .models import Note
from .source import FilesystemVault, NoteSource

__all__ = ["FilesystemVault", "Note", "NoteSource", "parse_frontmatter"]
