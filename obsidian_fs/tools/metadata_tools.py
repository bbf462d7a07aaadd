"""Metadata and MOC discovery tools."""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_fs.config import get_vault_configuration
from obsidian_fs.server import mcp
from obsidian_fs.session import resolve_vault
from obsidian_fs.models import GetNoteMetadataInput, DiscoverMocsInput
from obsidian_fs.core.search_operations import (
    get_note_metadata as get_note_metadata_core,
    discover_mocs as discover_mocs_core,
)


@mcp.tool(
    annotations={
        "title": "Get Note Metadata",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def get_note_metadata(
    input: GetNoteMetadataInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Extract frontmatter, title, tags and a content preview without the full body.

    Single mode (``title``) returns one metadata object. Batch mode
    (``batch=True``) returns one page of notes under ``directory`` together
    with any per-file errors.

    Returns:
        Single mode:
            {"path", "frontmatter", "title", "title_line", "tags", "inline_tags",
             "has_content", "content_length", "content_preview"}
        Batch mode:
            {"vault", "notes": [...], "count", "errors": [{"path", "error"}], "pagination"}
    """
    metadata = resolve_vault(input.vault, ctx)
    return get_note_metadata_core(
        metadata,
        title=input.title,
        batch=input.batch,
        directory=input.directory,
        limit=input.limit,
        offset=input.offset,
        limits=get_vault_configuration().limits,
    )


@mcp.tool(
    annotations={
        "title": "Discover Maps of Content",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def discover_mocs(
    input: DiscoverMocsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List Maps of Content (notes tagged ``moc``) with the notes they link to.

    Returns:
        {
            "vault": str,
            "mocs": [{"path", "title", "tags", "linked_notes", "link_count", "linked_mocs"}],
            "count": int
        }
    """
    metadata = resolve_vault(input.vault, ctx)
    return discover_mocs_core(
        metadata,
        moc_name=input.moc_name,
        directory=input.directory,
        limits=get_vault_configuration().limits,
    )
