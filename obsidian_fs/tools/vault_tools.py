"""MCP tools for vault discovery and per-session vault selection."""

import logging
from typing import Any

from mcp.server.fastmcp import Context

from obsidian_fs.config import get_vault_configuration
from obsidian_fs.core.vault_operations import list_markdown_files
from obsidian_fs.models import ListVaultsInput, SetActiveVaultInput
from obsidian_fs.server import mcp
from obsidian_fs.session import select_vault, selected_vault_name

logger = logging.getLogger(__name__)


@mcp.tool(
    annotations={
        "title": "List Vaults",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def list_vaults(
    input: ListVaultsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Describe the vault configuration this server runs with.

    Args:
        input (ListVaultsInput): Validated input containing:
            - include_note_counts (bool): Count notes per accessible vault (default False)
        ctx (Context, optional): FastMCP context for the session's selection

    Returns:
        {
            "default": str,            # Vault used when nothing else is selected
            "active": str,             # Vault calls from this session target
            "source": str,             # vaults.yaml path or "$OBSIDIAN_VAULT_PATH"
            "from_environment": bool,  # True when no config file was found
            "limits": {"max_file_size", "max_search_results", "context_lines",
                       "max_line_length", "metadata_batch_limit"},
            "vaults": [{"name", "path", "description", "exists", "note_count"?}]
        }

    Examples:
        - Use when: Starting a conversation, to learn vault names and search limits
        - Then: set_active_vault() to work in a non-default vault

    Error Handling:
        - No vaults.yaml and $OBSIDIAN_VAULT_PATH unset → Error naming both
        - Malformed vaults.yaml → Error describing the problem
    """
    configuration = get_vault_configuration()
    payload = configuration.as_payload()
    payload["active"] = selected_vault_name(ctx)

    if input.include_note_counts:
        for entry in payload["vaults"]:
            metadata = configuration.get(entry["name"])
            entry["note_count"] = len(list_markdown_files(metadata)) if entry["exists"] else None

    return payload


@mcp.tool()
async def set_active_vault(
    input: SetActiveVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Make a vault the target of later calls that omit ``vault``.

    Args:
        input (SetActiveVaultInput): Validated input containing:
            - vault (str): A configured vault name (see list_vaults())
        ctx (Context): FastMCP context identifying the session

    Returns:
        {"vault": str, "path": str, "status": "active", "previous": str}

    Error Handling:
        - ValidationError: Name not in the configuration (lists valid names)
        - Vault directory missing → Error with the path
    """
    previous = selected_vault_name(ctx)
    metadata = select_vault(ctx, input.vault)
    return {
        "vault": metadata.name,
        "path": str(metadata.path),
        "status": "active",
        "previous": previous,
    }
