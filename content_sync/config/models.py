"""Settings models: the persisted plugin settings and the per-run sync config."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONTENT_FOLDER = str(Path("~") / "path" / "to" / "content" / "folder")
DEFAULT_CONTENT_KEY = "publish_to_content_folder"


class SyncConfig(BaseModel):
    """What a single sync run needs. Immutable for the duration of the run."""

    model_config = ConfigDict(frozen=True)

    destination_root: Path
    flag_key: str = Field(min_length=1)

    @field_validator("destination_root", mode="before")
    @classmethod
    def expand_destination(cls, v: str | Path) -> Path:
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"destination_root must be an absolute path, got {v!r}")
        return path

    @field_validator("flag_key")
    @classmethod
    def validate_flag_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("flag_key cannot be empty or whitespace")
        return v


class ContentSyncSettings(BaseModel):
    # camelCase aliases match the host plugin's data.json
    model_config = ConfigDict(populate_by_name=True)

    path_to_content_folder: str = Field(default=DEFAULT_CONTENT_FOLDER, alias="pathToContentFolder")
    content_key: str = Field(default=DEFAULT_CONTENT_KEY, alias="contentKey")
    vault_path: str = Field(default=".", alias="vaultPath")
    plugin_data: str | None = None
    log_level: Literal["debug", "info", "warn", "error"] = "info"

    def to_sync_config(self) -> SyncConfig:
        """Validate the two sync settings into a SyncConfig.

        Raises pydantic.ValidationError if the folder is relative or the key is blank.
        """
        return SyncConfig(
            destination_root=self.path_to_content_folder,
            flag_key=self.content_key,
        )
