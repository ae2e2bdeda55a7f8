"""Tests for content_sync.vault — frontmatter parsing, Note, FilesystemVault."""

import os
from pathlib import Path

import pytest
import yaml

from content_sync.errors import MetadataUnavailable, VaultUnavailable
from content_sync.vault import FilesystemVault, Note, NoteSource, parse_frontmatter


def _write(vault: Path, rel: str, content: str) -> Path:
    path = vault / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


# ── parse_frontmatter ───────────────────────────────────────────────


class TestParseFrontmatter:
    def test_valid_yaml_frontmatter(self):
        meta, body = parse_frontmatter("---\npublish: true\ntitle: Hello\n---\n\nBody.")
        assert meta == {"publish": True, "title": "Hello"}
        assert body == "\nBody."

    def test_no_frontmatter(self):
        content = "Just text, no YAML."
        meta, body = parse_frontmatter(content)
        assert meta == {}
        assert body == content

    def test_fence_not_on_first_line_is_body(self):
        content = "\n---\npublish: true\n---\n"
        meta, body = parse_frontmatter(content)
        assert meta == {}
        assert body == content

    def test_empty_block(self):
        meta, body = parse_frontmatter("---\n---\nBody.")
        assert meta == {}
        assert body == "Body."

    def test_crlf_line_endings(self):
        meta, _ = parse_frontmatter("---\r\npublish: true\r\n---\r\nBody.")
        assert meta == {"publish": True}

    def test_unterminated_block_is_body(self):
        meta, body = parse_frontmatter("---\npublish: true\n")
        assert meta == {}

    def test_malformed_yaml_raises(self):
        with pytest.raises(yaml.YAMLError):
            parse_frontmatter("---\n: [invalid yaml\n---\n\nBody.")

    def test_non_mapping_raises(self):
        with pytest.raises(ValueError, match="mapping"):
            parse_frontmatter("---\n- a\n- b\n---\n")


# ── Note ────────────────────────────────────────────────────────────


class TestNote:
    def test_require_metadata_returns_snapshot(self, tmp_path):
        note = Note(relative_path="a.md", absolute_path=tmp_path / "a.md", metadata={"k": 1})
        assert note.require_metadata() == {"k": 1}

    def test_require_metadata_raises_when_unreadable(self, tmp_path):
        note = Note(
            relative_path="a.md",
            absolute_path=tmp_path / "a.md",
            metadata=None,
            metadata_error="bad yaml",
        )
        with pytest.raises(MetadataUnavailable) as exc_info:
            note.require_metadata()
        assert exc_info.value.path == "a.md"
        assert exc_info.value.reason == "bad yaml"

    def test_modified_time_reads_disk_each_call(self, tmp_path):
        path = tmp_path / "a.md"
        path.write_text("x")
        note = Note(relative_path="a.md", absolute_path=path, metadata={})
        os.utime(path, ns=(1_000_000_000, 1_000_000_000))
        assert note.modified_time() == 1_000_000_000
        os.utime(path, ns=(2_000_000_000, 2_000_000_000))
        assert note.modified_time() == 2_000_000_000

    def test_modified_time_of_missing_file_raises(self, tmp_path):
        note = Note(relative_path="gone.md", absolute_path=tmp_path / "gone.md", metadata={})
        with pytest.raises(OSError):
            note.modified_time()

    def test_is_frozen(self, tmp_path):
        note = Note(relative_path="a.md", absolute_path=tmp_path / "a.md", metadata={})
        with pytest.raises(Exception):
            note.relative_path = "b.md"


# ── FilesystemVault ─────────────────────────────────────────────────


class TestFilesystemVault:
    def test_satisfies_protocol(self, vault):
        assert isinstance(FilesystemVault(vault), NoteSource)

    def test_lists_markdown_files_sorted(self, vault):
        _write(vault, "b.md", "---\npublish: true\n---\n")
        _write(vault, "a.md", "plain")
        _write(vault, "image.png", "binary")
        notes = FilesystemVault(vault).list_notes()
        assert [n.relative_path for n in notes] == ["a.md", "b.md"]
        assert notes[0].metadata == {}
        assert notes[1].metadata == {"publish": True}

    def test_nested_notes_use_posix_relative_paths(self, vault):
        _write(vault, "posts/2024/hello.md", "x")
        notes = FilesystemVault(vault).list_notes()
        assert notes[0].relative_path == "posts/2024/hello.md"
        assert notes[0].absolute_path == vault.resolve() / "posts" / "2024" / "hello.md"

    def test_skips_hidden_folders(self, vault):
        _write(vault, ".obsidian/workspace.md", "x")
        _write(vault, ".trash/old.md", "x")
        _write(vault, "kept.md", "x")
        notes = FilesystemVault(vault).list_notes()
        assert [n.relative_path for n in notes] == ["kept.md"]

    def test_unreadable_frontmatter_is_recorded_not_raised(self, vault):
        _write(vault, "broken.md", "---\n: [invalid yaml\n---\n")
        _write(vault, "ok.md", "---\npublish: true\n---\n")
        notes = FilesystemVault(vault).list_notes()
        broken = notes[0]
        assert broken.relative_path == "broken.md"
        assert broken.metadata is None
        assert broken.metadata_error
        assert notes[1].metadata == {"publish": True}

    def test_non_string_keys_survive(self, vault):
        _write(vault, "a.md", "---\n1: one\npublish: true\n---\n")
        note = FilesystemVault(vault).list_notes()[0]
        assert note.metadata[1] == "one"

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(VaultUnavailable):
            FilesystemVault(tmp_path / "nope").list_notes()
