"""Obsidian Filesystem MCP Server

Boolean-query search and note management over Obsidian vaults via the
Model Context Protocol.
"""

from obsidian_fs.config import get_vault_configuration
from obsidian_fs.data_models import SearchLimits, VaultMetadata, VaultConfiguration
from obsidian_fs.session import resolve_vault, select_vault, selected_vault_name
from obsidian_fs.server import mcp, run_server

# Import tools to register them with the MCP server
from obsidian_fs import tools  # noqa: F401

__version__ = "0.1.0"
__all__ = [
    "get_vault_configuration",
    "SearchLimits",
    "VaultMetadata",
    "VaultConfiguration",
    "resolve_vault",
    "select_vault",
    "selected_vault_name",
    "mcp",
    "run_server",
]
