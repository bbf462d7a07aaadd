"""Integration tests for the MCP tool wrappers against a configured vault."""

from types import SimpleNamespace

import pytest
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import ValidationError

from obsidian_fs import mcp, session
from obsidian_fs.models import (
    DiscoverMocsInput,
    GetNoteMetadataInput,
    ListNotesInput,
    ListVaultsInput,
    ReadNoteInput,
    SearchByTagsInput,
    SearchByTitleInput,
    SearchVaultInput,
    SetActiveVaultInput,
    WriteNoteInput,
)
from obsidian_fs.tools.metadata_tools import discover_mocs, get_note_metadata
from obsidian_fs.tools.note_tools import list_notes, read_note, write_note
from obsidian_fs.tools.search_tools import search_by_tags, search_by_title, search_vault
from obsidian_fs.tools.vault_tools import list_vaults, set_active_vault


@pytest.fixture
def ctx(monkeypatch):
    monkeypatch.setattr(session, "_SELECTIONS", {})
    return SimpleNamespace(session=object())


@pytest.mark.asyncio
async def test_all_tools_registered():
    names = {tool.name for tool in await mcp.list_tools()}
    assert names == {
        "list_vaults",
        "set_active_vault",
        "read_note",
        "write_note",
        "delete_note",
        "list_notes",
        "search_vault",
        "search_by_title",
        "search_by_tags",
        "get_note_metadata",
        "discover_mocs",
    }


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_vaults(configured_vault, ctx, tmp_path):
    result = await list_vaults(ListVaultsInput(), ctx)

    assert result["default"] == "test"
    assert result["active"] == "test"
    assert result["source"] == str(tmp_path / "vaults.yaml")
    assert result["from_environment"] is False
    assert result["limits"]["max_search_results"] == 50
    assert result["limits"]["context_lines"] == 2
    assert [vault["name"] for vault in result["vaults"]] == ["test", "other"]
    assert "note_count" not in result["vaults"][0]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_vaults_with_note_counts(configured_vault, ctx):
    result = await list_vaults(ListVaultsInput(include_note_counts=True), ctx)

    assert {vault["name"]: vault["note_count"] for vault in result["vaults"]} == {"test": 6, "other": 1}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_vaults_reports_environment_fallback(tmp_path, vault_path, monkeypatch, clear_configuration_cache, ctx):
    monkeypatch.setenv("OBSIDIAN_VAULTS_CONFIG", str(tmp_path / "absent.yaml"))
    monkeypatch.setenv("OBSIDIAN_VAULT_PATH", str(vault_path))

    result = await list_vaults(ListVaultsInput(), ctx)

    assert result["from_environment"] is True
    assert result["source"] == "$OBSIDIAN_VAULT_PATH"
    assert result["active"] == "default"
    assert result["vaults"][0]["path"] == str(vault_path)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_set_active_vault_switches_default_target(configured_vault, ctx):
    result = await set_active_vault(SetActiveVaultInput(vault="other"), ctx)
    assert result["status"] == "active"
    assert result["previous"] == "test"

    listing = await list_notes(ListNotesInput(), ctx)
    assert listing["vault"] == "other"
    assert listing["notes"] == ["lonely.md"]

    assert (await list_vaults(ListVaultsInput(), ctx))["active"] == "other"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_selection_is_per_session(configured_vault, ctx):
    await set_active_vault(SetActiveVaultInput(vault="other"), ctx)
    other_session = SimpleNamespace(session=object())

    assert (await list_notes(ListNotesInput(), other_session))["vault"] == "test"


def test_set_unknown_vault(configured_vault):
    with pytest.raises(ValidationError, match="Available vaults: other, test"):
        SetActiveVaultInput(vault="missing")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_set_active_vault_requires_directory(configured_vault, ctx, tmp_path):
    (tmp_path / "other" / "lonely.md").unlink()
    (tmp_path / "other").rmdir()

    with pytest.raises(FileNotFoundError, match="other"):
        await set_active_vault(SetActiveVaultInput(vault="other"), ctx)
    assert (await list_vaults(ListVaultsInput(), ctx))["active"] == "test"


def test_stale_selection_falls_back_to_default(configured_vault, ctx):
    session._SELECTIONS[id(ctx.session)] = "removed"

    assert session.selected_vault_name(ctx) == "test"
    assert id(ctx.session) not in session._SELECTIONS


@pytest.mark.integration
@pytest.mark.asyncio
async def test_explicit_vault_overrides_active(configured_vault, ctx):
    await set_active_vault(SetActiveVaultInput(vault="other"), ctx)

    result = await read_note(ReadNoteInput(title="notes.md", vault="test"), ctx)
    assert result["note"] == "notes.md"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_write_then_read(configured_vault, ctx):
    await write_note(WriteNoteInput(title="Inbox/new", content="# New\n\ngit log\n"), ctx)
    result = await read_note(ReadNoteInput(title="Inbox/new"), ctx)

    assert result["content"] == "# New\n\ngit log\n"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_search_vault_uses_configured_limits(configured_vault, ctx):
    result = await search_vault(SearchVaultInput(query="git OR backup"), ctx)

    assert result["pagination"]["limit"] == 50
    assert result["total_matches"] == 4


@pytest.mark.integration
@pytest.mark.asyncio
async def test_search_vault_invalid_query(configured_vault, ctx):
    with pytest.raises(ToolError, match="Invalid query"):
        await search_vault(SearchVaultInput(query="(git"), ctx)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_search_by_title_and_tags(configured_vault, ctx):
    titles = await search_by_title(SearchByTitleInput(query="MOC"), ctx)
    tags = await search_by_tags(SearchByTagsInput(tags=["#moc"]), ctx)

    assert titles["count"] == 2
    assert [note["path"] for note in tags["notes"]] == ["Maps/Languages MOC.md", "Maps/Programming MOC.md"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_metadata_and_mocs(configured_vault, ctx):
    metadata = await get_note_metadata(GetNoteMetadataInput(title="projects/mcp"), ctx)
    mocs = await discover_mocs(DiscoverMocsInput(), ctx)

    assert metadata["tags"] == ["project"]
    assert mocs["count"] == 2
