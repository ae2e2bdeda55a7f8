"""Settings loading: a YAML settings file, overlaid by the host plugin's data.json."""

import json
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ContentSyncSettings

CONFIG_FILENAME = "content-sync.yaml"

# Keys the host plugin persists in data.json, and the settings they feed.
_PLUGIN_KEYS = {
    "pathToContentFolder": "path_to_content_folder",
    "contentKey": "content_key",
}


def load_config(cli_path: str | None = None, plugin_data: str | None = None) -> ContentSyncSettings:
    """Resolve settings for one run.

    The settings file is the first that exists of: ``cli_path``,
    ``./content-sync.yaml``, ``~/.content-sync/config.yaml``; defaults if
    none does. The host plugin's ``data.json`` (``plugin_data``, or the
    ``plugin_data`` setting) then overrides the destination and flag key,
    since the plugin's own settings tab owns those two values.

    Raises ValueError naming the offending file.
    """
    settings = _load_settings_file(cli_path)
    data_path = plugin_data or settings.plugin_data
    if data_path:
        settings = apply_plugin_data(settings, Path(data_path).expanduser())
    return settings


def _load_settings_file(cli_path: str | None) -> ContentSyncSettings:
    candidates = [
        Path(cli_path).expanduser() if cli_path else None,
        Path(".") / CONFIG_FILENAME,
        Path.home() / ".content-sync" / "config.yaml",
    ]
    for path in candidates:
        if path is None or not path.exists():
            continue
        raw = _read_yaml(path)
        if raw is None:
            continue
        try:
            return ContentSyncSettings(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
    return ContentSyncSettings()


def _read_yaml(path: Path) -> dict | None:
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping at top level")
    return raw


def apply_plugin_data(settings: ContentSyncSettings, path: Path) -> ContentSyncSettings:
    """Overlay the plugin's persisted ``pathToContentFolder``/``contentKey`` onto settings.

    Other keys in the blob belong to the host and are ignored.
    """
    try:
        blob = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValueError(f"Cannot read plugin data {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in plugin data {path}: {e}") from e
    if not isinstance(blob, dict):
        raise ValueError(f"Invalid plugin data in {path}: expected an object")

    update = {field: blob[key] for key, field in _PLUGIN_KEYS.items() if key in blob}
    if not update:
        return settings
    try:
        return ContentSyncSettings(**{**settings.model_dump(), **update})
    except ValidationError as e:
        raise ValueError(f"Invalid plugin data in {path}: {e}") from e


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `content-sync config init`
DEFAULT_CONFIG_TEMPLATE = """\
# content-sync.yaml

# Vault whose notes are scanned
vault_path: "."

# Folder that mirrors the flagged notes (absolute path, ~ allowed)
path_to_content_folder: "~/path/to/content/folder"

# Frontmatter key whose truthy value marks a note for publishing
content_key: "publish_to_content_folder"

# The host plugin's data.json; when set, its pathToContentFolder and
# contentKey override the two values above
# plugin_data: "<vault>/.obsidian/plugins/content-sync/data.json"

# Logging
log_level: "info"              # debug | info | warn | error
"""
