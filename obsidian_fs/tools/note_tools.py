"""Note management MCP tools.

This module provides MCP tool wrappers for note CRUD operations:
- Read note content
- Create or overwrite notes
- Delete notes
- List note paths

All tools delegate to core operations in obsidian_fs.core.note_operations.
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_fs.config import get_vault_configuration
from obsidian_fs.server import mcp
from obsidian_fs.session import resolve_vault
from obsidian_fs.models import (
    ReadNoteInput,
    WriteNoteInput,
    DeleteNoteInput,
    ListNotesInput,
)
from obsidian_fs.core.note_operations import (
    read_note as read_note_core,
    write_note as write_note_core,
    delete_note as delete_note_core,
    list_notes as list_notes_core,
)


@mcp.tool(
    annotations={
        "title": "Read Note",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def read_note(
    input: ReadNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read the complete markdown content of a note.

    Can be expensive for large notes. Consider search_vault() first for a
    preview of the relevant lines.

    Args:
        input (ReadNoteInput): Validated input containing:
            - title (str): Note path, .md optional
                Examples: "Daily Notes/2025-10-26", "Projects/Roadmap.md"
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"vault": str, "note": str, "content": str}

    Error Handling:
        - ValidationError: Empty title, absolute path, or path traversal attempt
        - Note not found → Error with note path
        - Note larger than the configured limit → Error with both sizes
    """
    metadata = resolve_vault(input.vault, ctx)
    return read_note_core(metadata, input.title, get_vault_configuration().limits)


# Creates or overwrites; result is ``{"vault", "note", "status"}``.
@mcp.tool()
async def write_note(
    input: WriteNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Create a note or overwrite an existing one.

    Parent folders are created automatically and null bytes are removed
    from the content.

    Args:
        input (WriteNoteInput): Validated input containing:
            - title (str): Note path, .md optional
            - content (str): Full markdown content (can be empty)
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"vault": str, "note": str, "status": "created" | "updated"}
    """
    metadata = resolve_vault(input.vault, ctx)
    return write_note_core(metadata, input.title, input.content)


@mcp.tool(
    annotations={
        "title": "Delete Note",
        "destructiveHint": True,
        "openWorldHint": False,
    }
)
async def delete_note(
    input: DeleteNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Delete a note permanently.

    Returns:
        {"vault": str, "note": str, "status": "deleted"}

    Error Handling:
        - Note not found → Error with note path
    """
    metadata = resolve_vault(input.vault, ctx)
    return delete_note_core(metadata, input.title)


@mcp.tool(
    annotations={
        "title": "List Notes",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def list_notes(
    input: ListNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List note paths in alphabetical order, one page at a time.

    Args:
        input (ListNotesInput): Validated input containing:
            - directory (str, optional): Folder to list (omit for whole vault)
            - limit (int): Page size (default 100)
            - offset (int): Paths to skip
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "notes": [str],  # Vault-relative paths with .md
            "count": int,
            "pagination": {"total", "returned", "limit", "offset", "has_more"}
        }
    """
    metadata = resolve_vault(input.vault, ctx)
    return list_notes_core(metadata, input.directory, limit=input.limit, offset=input.offset)
