"""Which vault a tool call targets.

A call names its vault explicitly, or inherits the vault its MCP session
selected with ``set_active_vault``, or falls back to the configured default.
"""

import logging
from typing import Optional

from mcp.server.fastmcp import Context

from obsidian_fs.config import get_vault_configuration
from obsidian_fs.core.vault_operations import ensure_vault_ready
from obsidian_fs.data_models import VaultMetadata

logger = logging.getLogger(__name__)

# Vault names chosen per session, keyed by the identity of the session object.
_SELECTIONS: dict[int, str] = {}


def _session_key(ctx: Context) -> int:
    return id(ctx.session)


def select_vault(ctx: Context, vault_name: str) -> VaultMetadata:
    """Make ``vault_name`` the target of later calls from this session.

    Raises:
        ValueError: If the name is not configured.
        FileNotFoundError: If the vault directory is not accessible.
    """
    metadata = get_vault_configuration().get(vault_name)
    ensure_vault_ready(metadata)
    _SELECTIONS[_session_key(ctx)] = metadata.name
    logger.info("Session %s now targets vault '%s'", _session_key(ctx), metadata.name)
    return metadata


def selected_vault_name(ctx: Optional[Context]) -> str:
    """Name of the vault a session targets when a call omits ``vault``.

    A selection that no longer exists in the configuration (for example after
    a reload) is dropped in favour of the default.
    """
    configuration = get_vault_configuration()
    if ctx is None:
        return configuration.default_vault

    key = _session_key(ctx)
    selected = _SELECTIONS.get(key)
    if selected is not None and selected not in configuration.vaults:
        logger.warning("Vault '%s' is no longer configured; using the default", selected)
        del _SELECTIONS[key]
        selected = None
    return selected or configuration.default_vault


def resolve_vault(vault: Optional[str], ctx: Optional[Context] = None) -> VaultMetadata:
    """Resolve the vault for one tool call.

    Raises:
        ValueError: If an explicit ``vault`` is not configured.
    """
    return get_vault_configuration().get(vault or selected_vault_name(ctx))
