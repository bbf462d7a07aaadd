import pytest

from obsidian_fs.core.note_operations import delete_note, list_notes, read_note, write_note
from obsidian_fs.data_models import SearchLimits

from conftest import SAMPLE_NOTES, SAMPLE_PATHS


def test_read_note_returns_raw_content(vault):
    result = read_note(vault, "projects/mcp")

    assert result == {
        "vault": "test",
        "note": "projects/mcp.md",
        "content": SAMPLE_NOTES["projects/mcp.md"],
    }


def test_read_note_missing(vault):
    with pytest.raises(FileNotFoundError, match="missing.md"):
        read_note(vault, "missing")


def test_read_note_respects_size_limit(vault):
    with pytest.raises(ValueError, match="File too large"):
        read_note(vault, "notes", limits=SearchLimits(max_file_size=8))


def test_write_note_creates_folders(vault):
    result = write_note(vault, "inbox/2025/idea", "# Idea\n")

    assert result == {"vault": "test", "note": "inbox/2025/idea.md", "status": "created"}
    assert (vault.path / "inbox" / "2025" / "idea.md").read_text(encoding="utf-8") == "# Idea\n"


def test_write_note_overwrites(vault):
    result = write_note(vault, "notes", "replaced\0 text")

    assert result["status"] == "updated"
    assert (vault.path / "notes.md").read_text(encoding="utf-8") == "replaced text"


def test_write_note_rejects_escape(vault, tmp_path):
    (vault.path / "link").symlink_to(tmp_path, target_is_directory=True)
    with pytest.raises(ValueError):
        write_note(vault, "link/evil", "x")


def test_delete_note(vault):
    result = delete_note(vault, "projects/backup")

    assert result == {"vault": "test", "note": "projects/backup.md", "status": "deleted"}
    assert not (vault.path / "projects" / "backup.md").exists()


def test_delete_missing_note(vault):
    with pytest.raises(FileNotFoundError):
        delete_note(vault, "projects/absent")


def test_list_notes_sorted(vault):
    result = list_notes(vault)

    assert result["notes"] == SAMPLE_PATHS
    assert result["count"] == len(SAMPLE_PATHS)
    assert result["pagination"]["has_more"] is False


def test_list_notes_paginated(vault):
    result = list_notes(vault, limit=2, offset=2)

    assert result["notes"] == SAMPLE_PATHS[2:4]
    assert result["pagination"] == {
        "total": len(SAMPLE_PATHS),
        "returned": 2,
        "limit": 2,
        "offset": 2,
        "has_more": True,
    }


def test_list_notes_in_directory(vault):
    assert list_notes(vault, directory="Maps")["notes"] == [
        "Maps/Languages MOC.md",
        "Maps/Programming MOC.md",
    ]


def test_list_notes_missing_directory(vault):
    with pytest.raises(FileNotFoundError):
        list_notes(vault, directory="archive")
