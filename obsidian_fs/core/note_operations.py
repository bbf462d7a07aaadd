"""Core business logic for note CRUD operations."""

from __future__ import annotations

import logging
from typing import Any, Optional

from obsidian_fs.core.search_results import paginate_array
from obsidian_fs.core.vault_operations import (
    ensure_vault_ready,
    list_markdown_files,
    note_display_name,
    read_markdown,
    resolve_note_path,
    sanitize_content,
)
from obsidian_fs.data_models import SearchLimits, VaultMetadata

logger = logging.getLogger(__name__)


def read_note(
    vault: VaultMetadata,
    title: str,
    limits: Optional[SearchLimits] = None,
) -> dict[str, Any]:
    """Retrieve the content of a markdown note.

    Args:
        vault: Vault metadata.
        title: Note identifier.
        limits: Size limits; ``max_file_size`` caps the readable note size.

    Returns:
        A dictionary containing vault metadata plus the raw note content.

    Raises:
        FileNotFoundError: If the note cannot be located.
        ValueError: If the note exceeds the configured size limit.
    """
    limits = limits or SearchLimits()
    ensure_vault_ready(vault)
    target_path = resolve_note_path(vault, title)
    if not target_path.is_file():
        raise FileNotFoundError(
            f"Note '{note_display_name(vault, target_path)}' not found in vault '{vault.name}'."
        )

    content = read_markdown(target_path, limits.max_file_size)
    return {
        "vault": vault.name,
        "note": note_display_name(vault, target_path),
        "content": content,
    }


def write_note(vault: VaultMetadata, title: str, content: str) -> dict[str, Any]:
    """Create a note or overwrite an existing one.

    Null bytes are stripped from ``content`` and missing parent folders are
    created.

    Returns:
        A dictionary describing the note with ``status`` ``"created"`` or
        ``"updated"``.

    Raises:
        FileNotFoundError: If the vault directory is missing.
        ValueError: If ``title`` resolves outside the vault.
    """
    ensure_vault_ready(vault)
    target_path = resolve_note_path(vault, title)
    existed = target_path.is_file()

    target_path.parent.mkdir(parents=True, exist_ok=True)
    target_path.write_text(sanitize_content(content), encoding="utf-8")

    status = "updated" if existed else "created"
    display = note_display_name(vault, target_path)
    logger.info("Wrote note '%s' in vault '%s' (%s)", display, vault.name, status)
    return {
        "vault": vault.name,
        "note": display,
        "status": status,
    }


def delete_note(vault: VaultMetadata, title: str) -> dict[str, Any]:
    """Delete a markdown note with the given title.

    Raises:
        FileNotFoundError: If the note does not exist.
    """
    ensure_vault_ready(vault)
    target_path = resolve_note_path(vault, title)
    if not target_path.is_file():
        raise FileNotFoundError(
            f"Note '{note_display_name(vault, target_path)}' not found in vault '{vault.name}'."
        )

    target_path.unlink(missing_ok=False)
    logger.info("Deleted note '%s' in vault '%s'", note_display_name(vault, target_path), vault.name)
    return {
        "vault": vault.name,
        "note": note_display_name(vault, target_path),
        "status": "deleted",
    }


def list_notes(
    vault: VaultMetadata,
    directory: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
) -> dict[str, Any]:
    """List note paths in the vault, sorted alphabetically and paginated.

    Args:
        vault: Vault metadata.
        directory: Optional folder (relative to the vault root) to restrict the listing.
        limit: Maximum number of paths to return.
        offset: Number of paths to skip.

    Returns:
        A dictionary with the vault name, the page of note paths, the page size
        and pagination details.

    Raises:
        FileNotFoundError: If ``directory`` does not exist.
        ValueError: If ``directory`` escapes the vault.
    """
    paths = [note_display_name(vault, path) for path in list_markdown_files(vault, directory)]
    page, pagination = paginate_array(paths, limit, offset)
    return {
        "vault": vault.name,
        "notes": page,
        "count": len(page),
        "pagination": pagination.as_payload(),
    }
