"""YAML frontmatter extraction for markdown notes."""

from __future__ import annotations

import re
from typing import Any

import yaml

# Opening fence must be the very first line; the block may be empty.
_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def parse_frontmatter(content: str) -> tuple[dict[Any, Any], str]:
    """Split markdown into (frontmatter, body).

    Content without a fenced block yields an empty mapping. Malformed YAML
    raises yaml.YAMLError, and a block that is not a mapping raises ValueError;
    callers decide what an unreadable block means.
    """
    match = _FRONTMATTER_RE.match(content)
    if match is None:
        return {}, content
    body = content[match.end():]
    fm_text = match.group(1) or ""
    metadata = yaml.safe_load(fm_text)
    if metadata is None:
        return {}, body
    if not isinstance(metadata, dict):
        raise ValueError(f"frontmatter must be a mapping, got {type(metadata).__name__}")
    return metadata, body
