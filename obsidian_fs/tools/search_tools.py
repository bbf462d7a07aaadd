"""Search tools for Obsidian vault operations.

This module contains the MCP tool wrappers for search operations:
- search_vault: Boolean/plain content search with context and pagination
- search_by_title: Search notes by H1 title
- search_by_tags: Find notes carrying all given tags
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context
from mcp.server.fastmcp.exceptions import ToolError

from obsidian_fs.config import get_vault_configuration
from obsidian_fs.server import mcp
from obsidian_fs.session import resolve_vault
from obsidian_fs.models import (
    SearchVaultInput,
    SearchByTitleInput,
    SearchByTagsInput,
)
from obsidian_fs.core.query_parser import QuerySyntaxError
from obsidian_fs.core.search_operations import (
    search_vault as search_vault_core,
    search_by_title as search_by_title_core,
    search_by_tags as search_by_tags_core,
)

logger = logging.getLogger(__name__)


@mcp.tool(
    annotations={
        "title": "Search Vault",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def search_vault(
    input: SearchVaultInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Search note contents with plain text or boolean operators.

    Plain queries (no operator syntax) return every line containing the text.
    Operator queries are evaluated against each whole note (content, H1 title
    and tags); matching notes return the lines containing a non-negated term.

    Query syntax:
        - ``git OR backup`` / ``git || backup``
        - ``mcp server`` / ``mcp AND server`` / ``mcp && server``
        - ``mcp NOT caas`` / ``mcp -caas``
        - ``"exact phrase"``, ``(git OR svn) backup``
        - ``title:Roadmap``, ``content:"release notes"``, ``tag:project``

    Args:
        input (SearchVaultInput): Validated input containing:
            - query (str): Search query
            - directory (str, optional): Folder to search
            - case_sensitive (bool): Match case exactly (default False)
            - include_context (bool): Add surrounding lines and highlighting (default True)
            - context_lines (int, optional): Lines of context on each side
            - limit (int, optional) / offset (int): Page through matches
            - max_results (int, optional): Cap matches instead of paginating
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "query": str,
            "files": [{"path", "match_count", "matches": [{"line", "content", "context"?}],
                       "partial_file"?}],
            "total_matches": int,   # Matches in this response
            "file_count": int,
            "files_searched": int,
            "pagination"?: {"total", "returned", "limit", "offset", "has_more"},
            "truncated"?: True, "message"?: str
        }

    Examples:
        - Use when: "Which notes mention git or backup?"
        - Workflow: search_vault() → read_note() for full detail
        - Don't use: Title lookup → Use search_by_title()

    Error Handling:
        - ValidationError: Empty query, bad limits, max_results combined with limit/offset
        - Malformed query (unbalanced parentheses, dangling operator, unterminated
          quote) → "Invalid query: ..." error
        - Directory not found or outside the vault → Error with the directory
    """
    metadata = resolve_vault(input.vault, ctx)
    try:
        return search_vault_core(
            metadata,
            input.query,
            directory=input.directory,
            case_sensitive=input.case_sensitive,
            include_context=input.include_context,
            context_lines=input.context_lines,
            limit=input.limit,
            offset=input.offset,
            max_results=input.max_results,
            limits=get_vault_configuration().limits,
        )
    except QuerySyntaxError as exc:
        raise ToolError(f"Invalid query: {exc}") from exc


@mcp.tool(
    annotations={
        "title": "Search Notes by Title",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def search_by_title(
    input: SearchByTitleInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Find notes whose first H1 heading contains the query.

    Returns:
        {
            "vault": str,
            "query": str,
            "results": [{"path": str, "title": str, "line": int}],
            "count": int,
            "files_searched": int,
            "pagination": {...}
        }
    """
    metadata = resolve_vault(input.vault, ctx)
    result = search_by_title_core(
        metadata,
        input.query,
        directory=input.directory,
        case_sensitive=input.case_sensitive,
        limit=input.limit,
        offset=input.offset,
        limits=get_vault_configuration().limits,
    )

    logger.info(
        "Title search in vault '%s' for '%s' found %d matches",
        metadata.name,
        result["query"],
        result["pagination"]["total"],
    )
    return result


@mcp.tool(
    annotations={
        "title": "Search Notes by Tags",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def search_by_tags(
    input: SearchByTagsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Find notes carrying ALL of the given tags.

    Tags come from the frontmatter ``tags`` key (string or list) and from
    inline ``#tags`` outside fenced code blocks.

    Args:
        input (SearchByTagsInput): Validated input containing:
            - tags (list[str]): Tags to require ('#' optional)
            - directory (str, optional): Folder to search
            - case_sensitive (bool): Compare tags case-sensitively (default False)
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"vault": str, "tags": [str], "notes": [{"path": str, "tags": [str]}], "count": int}
    """
    metadata = resolve_vault(input.vault, ctx)
    result = search_by_tags_core(
        metadata,
        input.tags,
        directory=input.directory,
        case_sensitive=input.case_sensitive,
        limits=get_vault_configuration().limits,
    )

    logger.info(
        "Tag search in vault '%s' for tags %s found %d matches",
        metadata.name,
        result["tags"],
        result["count"],
    )
    return result
