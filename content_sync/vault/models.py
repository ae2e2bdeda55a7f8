"""Note model for vault documents."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from content_sync.errors import MetadataUnavailable


class Note(BaseModel):
    """A markdown note in the vault.

    ``metadata`` is the frontmatter as read when the vault was scanned. It is
    ``None`` when the frontmatter could not be read, with the reason kept in
    ``metadata_error``. Modification time is deliberately not stored: it is
    read from disk each time it is compared.
    """

    model_config = ConfigDict(frozen=True)

    relative_path: str
    absolute_path: Path
    metadata: dict[Any, Any] | None = None
    metadata_error: str | None = None

    def require_metadata(self) -> dict[Any, Any]:
        if self.metadata is None:
            raise MetadataUnavailable(self.relative_path, self.metadata_error or "no metadata")
        return self.metadata

    def modified_time(self) -> int:
        """Last modification time in nanoseconds. Raises OSError if the file is gone."""
        return self.absolute_path.stat().st_mtime_ns
